"""Schemas for events returned by the Google Calendar event-list endpoint."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EventTime(BaseModel):
    """Either a timed start/end (``dateTime``) or an all-day ``date``."""

    model_config = ConfigDict(populate_by_name=True)

    date_time: Optional[dt.datetime] = Field(None, alias="dateTime")
    date: Optional[dt.date] = None
    time_zone: Optional[str] = Field(None, alias="timeZone")

    @property
    def is_all_day(self) -> bool:
        return self.date_time is None and self.date is not None

    @property
    def display(self) -> str:
        if self.date_time is not None:
            return self.date_time.strftime("%Y-%m-%d %H:%M")
        if self.date is not None:
            return self.date.isoformat()
        return ""


class CalendarEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    summary: Optional[str] = None
    description: Optional[str] = None
    start: EventTime = Field(default_factory=EventTime)
    end: EventTime = Field(default_factory=EventTime)
    html_link: Optional[str] = Field(None, alias="htmlLink")

    @property
    def display_title(self) -> str:
        return self.summary or "(No Title)"


__all__ = ["CalendarEvent", "EventTime"]
