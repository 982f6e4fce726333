"""YAML defaults file loading.

The ``--config`` file supplies default values for the ``event`` command
(kind, content, tags, relays, timeouts). It is parsed with
``yaml.safe_load`` so no Python objects can be instantiated from tags,
and its structure is validated afterwards by
[EventConfig][nak.services.event.configs.EventConfig].

Examples:
    ```yaml
    # ~/.config/nak.yaml
    kind: 1
    content: gm
    relays:
      - wss://nos.lol
    publish_timeout: 5
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError


def load_yaml(config_path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping from ``config_path``.

    Returns:
        The parsed mapping, or an empty dict if the file is empty.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            its top level is not a mapping.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(data).__name__}"
        )
    return data
