"""Retry configuration resolution.

Splits configuration into a Pydantic schema (``AttemptSettings``) that owns
field types, defaults and constraints, and a loader that reads raw values
from the environment. ``resolve_policy`` merges the layers and returns the
immutable ``AttemptPolicy`` consumed by ``attempt()``.

Precedence (highest first): explicit overrides, ``FALLIBLE_*`` environment
variables (a ``.env`` file is loaded first without overriding the process
environment), schema defaults.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fallible.errors import ConfigurationError
from fallible.retry import AttemptPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "FALLIBLE_"


class AttemptSettings(BaseModel):
    """Schema for retry configuration.

    Single source of truth for field types, defaults and constraints.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    attempts: int = Field(default=3, ge=1)
    # Milliseconds between the first and second call.
    timeout: float = Field(default=1000, ge=0)
    backoff: float = Field(default=0.5, ge=0)

    def to_policy(self) -> AttemptPolicy:
        return AttemptPolicy(
            attempts=self.attempts, timeout=self.timeout, backoff=self.backoff
        )


def load_env() -> dict[str, str]:
    """Return raw ``FALLIBLE_*`` values for known settings fields.

    Values are left as strings; coercion happens in the schema.
    """
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)
    values: dict[str, str] = {}
    for name in AttemptSettings.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return values


def resolve_policy(overrides: Mapping[str, Any] | None = None) -> AttemptPolicy:
    """Resolve an ``AttemptPolicy`` from defaults, environment and overrides.

    Raises:
        ConfigurationError: A value violates its constraints or an
            override names an unknown field.
    """
    merged: dict[str, Any] = {**load_env(), **dict(overrides or {})}
    try:
        settings = AttemptSettings.model_validate(merged)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
        raise ConfigurationError(
            f"Invalid retry configuration for {field!r}: {first.get('msg')}",
            hint=(
                f"Check the override or the {ENV_PREFIX}{field.upper()} "
                "environment variable."
            ),
        ) from exc
    return settings.to_policy()


__all__ = ["ENV_PREFIX", "AttemptSettings", "load_env", "resolve_policy"]
