"""Google Calendar agenda with a self-refreshing OAuth credential record."""

__version__ = "0.1.0"
