"""Reader configuration using Pydantic Settings.

Environment variables:
    WHITESCAN_ENCODING: text encoding used to decode source lines
    WHITESCAN_DECODE_ERRORS: codec error handler (strict, replace, ...)
    WHITESCAN_LOG_LEVEL: level applied by ``configure_logging``
"""

from __future__ import annotations

import codecs
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DecodeErrors = Literal["strict", "replace", "ignore", "surrogateescape", "backslashreplace"]


class ReaderSettings(BaseSettings):
    """Defaults applied to every :class:`~whitescan.reader.LineBuffer`.

    Example:
        >>> settings = ReaderSettings(encoding="latin-1")
        >>> LineBuffer(source, settings=settings)
    """

    model_config = SettingsConfigDict(
        env_prefix="WHITESCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    encoding: str = Field(
        default="utf-8",
        description="Encoding used to decode lines read from byte sources",
    )

    decode_errors: DecodeErrors = Field(
        default="strict",
        description="Codec error handler applied while decoding lines",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the whitescan logger",
    )

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


_settings: Optional[ReaderSettings] = None


def get_settings() -> ReaderSettings:
    """Get global settings singleton."""
    global _settings
    if _settings is None:
        _settings = ReaderSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None


__all__ = ["ReaderSettings", "DecodeErrors", "get_settings", "reset_settings"]
