"""Configuration model for the ``event`` command.

See Also:
    [run_event()][nak.services.event.command.run_event]: Consumes this model.
    [load_yaml()][nak.core.yaml.load_yaml]: Loads the optional defaults file.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from nak.core.exceptions import ConfigurationError
from nak.models.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_CONTENT,
    DEFAULT_KIND,
    DEFAULT_PUBLISH_TIMEOUT,
    DEFAULT_SECRET_KEY,
    NOW,
    OutputMode,
)
from nak.utils.keys import ENV_SECRET_KEY


class EventConfig(BaseModel):
    """Validated input of one ``event`` invocation.

    Field values come from, in decreasing precedence: CLI flags, the
    YAML defaults file, and the defaults below. ``sec`` additionally
    falls back to the ``NAK_SECRET_KEY`` environment variable and is
    rejected when it appears in a YAML file.

    Attributes:
        sec: Secret key (hex or ``nsec1``) used for signing.
        kind: Event kind.
        content: Event content.
        tags: Generic ``key=value[;extra...]`` tag expressions.
        e_tags: Values for ``["e", value]`` tags.
        p_tags: Values for ``["p", value]`` tags.
        created_at: ``"now"`` or a base-10 unix timestamp string.
        envelope: Render as ``["EVENT", <event>]``.
        nson: Render using NSON.
        relays: Relay URLs; non-empty switches to publish mode.
        publish_timeout: Per-relay publish deadline in seconds.
        connect_timeout: Per-relay connection handshake timeout in seconds.

    Warning:
        ``sec`` is excluded from ``repr`` so the model can be logged
        safely.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    sec: str = Field(default=DEFAULT_SECRET_KEY, min_length=1, repr=False)
    kind: int = Field(default=DEFAULT_KIND, ge=0)
    content: str = DEFAULT_CONTENT
    tags: list[str] = Field(default_factory=list)
    e_tags: list[str] = Field(default_factory=list)
    p_tags: list[str] = Field(default_factory=list)
    created_at: str = NOW
    envelope: bool = False
    nson: bool = False
    relays: list[str] = Field(default_factory=list)
    publish_timeout: float = Field(default=DEFAULT_PUBLISH_TIMEOUT, gt=0.0, le=600.0)
    connect_timeout: float = Field(default=DEFAULT_CONNECT_TIMEOUT, gt=0.0, le=600.0)

    @model_validator(mode="before")
    @classmethod
    def _load_sec_from_env(cls, data: Any) -> Any:
        """Fill ``sec`` from ``NAK_SECRET_KEY`` when it was not given explicitly."""
        if isinstance(data, dict) and "sec" not in data:
            value = os.getenv(ENV_SECRET_KEY)
            if value:
                data = {**data, "sec": value}
        return data

    @property
    def output_mode(self) -> OutputMode:
        return OutputMode.select(envelope=self.envelope, nson=self.nson)

    @property
    def publish_mode(self) -> bool:
        return bool(self.relays)

    @classmethod
    def from_sources(
        cls,
        cli: dict[str, Any],
        file_defaults: dict[str, Any] | None = None,
    ) -> EventConfig:
        """Merge YAML defaults with explicit CLI values and validate.

        Raises:
            ConfigurationError: If the YAML contains ``sec`` or validation fails.
        """
        merged: dict[str, Any] = dict(file_defaults or {})
        if "sec" in merged:
            raise ConfigurationError(
                f"secret keys must not be stored in config files; use --sec or {ENV_SECRET_KEY}"
            )
        merged.update({k: v for k, v in cli.items() if v is not None})
        try:
            return cls(**merged)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e
