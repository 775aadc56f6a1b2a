"""Validated table settings for the Briscola host."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "BRISCOLA_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class TableSettings(BaseModel):
    resolve_delay: float = Field(
        1.6,
        ge=0,
        description="Seconds a completed trick stays on the table before it is resolved.",
    )
    reveal_delay: float = Field(
        5.0,
        ge=0,
        description="Seconds 2v2 teammates see each other's hands before play starts.",
    )
    rotate_starting_player: bool = Field(
        True, description="Move the opening lead one seat on every new game."
    )
    seed: Optional[int] = Field(None, description="Seed for reproducible shuffles.")

    @field_validator("resolve_delay", "reveal_delay")
    @classmethod
    def ensure_reasonable_delay(cls, value: float) -> float:
        if value > 60:
            raise ValueError("Delays longer than a minute stall the table.")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TableSettings":
        """Build settings from ``BRISCOLA_*`` environment variables."""
        env = os.environ if environ is None else environ
        values: dict = {}
        for name in ("resolve_delay", "reveal_delay", "seed"):
            raw = env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw not in (None, ""):
                values[name] = raw
        rotate = env.get(f"{ENV_PREFIX}ROTATE_STARTER", "").strip().lower()
        if rotate in _TRUE:
            values["rotate_starting_player"] = True
        elif rotate in _FALSE:
            values["rotate_starting_player"] = False
        elif rotate:
            raise ValueError(f"Invalid {ENV_PREFIX}ROTATE_STARTER value: {rotate!r}")
        return cls(**values)
