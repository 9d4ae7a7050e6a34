try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from gcal_agenda.services.token_cipher import TokenCipherService


def test_token_cipher_roundtrip() -> None:
    cipher = TokenCipherService(secret="super-secret-key")

    encrypted = cipher.encrypt("ya29.access-token")

    assert encrypted != "ya29.access-token"
    assert cipher.decrypt(encrypted) == "ya29.access-token"


def test_token_cipher_rejects_bad_ciphertext() -> None:
    cipher = TokenCipherService(secret="another-secret")

    with pytest.raises(ValueError):
        cipher.decrypt("not-valid")


def test_token_cipher_rejects_ciphertext_from_other_secret() -> None:
    encrypted = TokenCipherService(secret="first").encrypt("1//refresh")

    with pytest.raises(ValueError):
        TokenCipherService(secret="second").decrypt(encrypted)


def test_optional_secret_disables_encryption() -> None:
    assert TokenCipherService.from_optional_secret(None) is None
    assert TokenCipherService.from_optional_secret("") is None
    assert isinstance(TokenCipherService.from_optional_secret("s"), TokenCipherService)
