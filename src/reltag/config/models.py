"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, reltag.toml only contains overrides.
Most repositories need no reltag.toml at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

# --- reltag.toml sections ---


class GrammarConfig(BaseModel):
    """[grammar] section."""

    model_config = {"frozen": True}

    marker: str = Field(default="up", pattern=r"^[A-Za-z]{2}$")
    min_year: int = 2000
    max_year: int = 3000

    @model_validator(mode="after")
    def _check_year_range(self) -> GrammarConfig:
        if self.min_year > self.max_year:
            msg = f"min_year ({self.min_year}) is greater than max_year ({self.max_year})"
            raise ValueError(msg)
        return self


class GitHubConfig(BaseModel):
    """[github] section."""

    model_config = {"frozen": True}

    api_url: str = "https://api.github.com"
    per_page: int = Field(default=100, ge=1, le=100)
    timeout: float = 10.0


class GitConfig(BaseModel):
    """[git] section."""

    model_config = {"frozen": True}

    remote: str = "origin"
    push: bool = True


BackendName = Literal["github", "git"]


# --- Release-line file (JSON) ---


class ReleaseLine(BaseModel):
    """Configured release line, e.g. ``{"year": 2024, "update": "up1"}``."""

    model_config = {"frozen": True}

    year: int
    update: str
