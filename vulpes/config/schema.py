"""
Configuration schema for vulpes.

Settings are loaded from a JSON file (default: ~/.vulpes/config.json).
The file is optional; every field has a default.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

DEFAULT_CONFIG_PATH = Path.home() / ".vulpes" / "config.json"


class FetchConfig(BaseModel):
    """Network limits for the HTTP fetcher."""

    timeout_seconds: float = 30.0
    max_redirects: int = 10
    max_body_bytes: int = 10 * 1024 * 1024  # larger bodies are truncated
    user_agent: str = "vulpes/0.1"

    @model_validator(mode="after")
    def _validate_limits(self) -> FetchConfig:
        """Validate that network limits are usable."""
        if self.timeout_seconds <= 0:
            raise ValueError("fetch.timeout_seconds must be > 0")
        if self.max_redirects < 0:
            raise ValueError("fetch.max_redirects must be >= 0")
        if self.max_body_bytes <= 0:
            raise ValueError("fetch.max_body_bytes must be > 0")
        return self


class DisplayConfig(BaseModel):
    """How fetched pages are presented on the command line."""

    home_page: str = "https://example.com"
    preview_chars: int = 1000

    @model_validator(mode="after")
    def _validate_preview(self) -> DisplayConfig:
        if self.preview_chars <= 0:
            raise ValueError("display.preview_chars must be > 0")
        return self


class Settings(BaseModel):
    """Root configuration object for vulpes."""

    fetch: FetchConfig = Field(default_factory=FetchConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> Settings:
        """
        Load settings from a JSON file.

        Missing keys use their default values.
        The file is optional — if it doesn't exist, all defaults apply.
        """
        if not path.exists():
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Persist settings to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            self.model_dump_json(indent=2, exclude_none=False),
            encoding="utf-8",
        )
