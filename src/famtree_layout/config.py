"""Tunable layout constants."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "FAMTREE_LAYOUT_"

# Margin the renderer adds around the layout bounds when sizing its viewport
VIEWBOX_PADDING = 200


class ConfigError(ValueError):
    """Raised for invalid layout configuration values."""


@dataclass(frozen=True)
class LayoutConfig:
    """Sizes, gaps and depth limits used by the layout engine.

    All values are pixels except the two layer limits, which count generations
    above and below the focused person.
    """

    min_node_width: int = 140
    max_node_width: int = 220
    node_height: int = 90
    char_width: int = 8
    padding: int = 60
    horizontal_gap: int = 60
    vertical_gap: int = 130
    spouse_gap: int = 20
    max_layers_up: int = 4
    max_layers_down: int = 4

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{f.name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigError(f"{f.name} must not be negative, got {value}")
        if self.min_node_width > self.max_node_width:
            raise ConfigError(
                f"min_node_width ({self.min_node_width}) exceeds "
                f"max_node_width ({self.max_node_width})"
            )

    def with_overrides(self, **values: int | None) -> LayoutConfig:
        """Return a copy with every non-None value applied."""
        changes = {k: v for k, v in values.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, *, dotenv: bool = True) -> LayoutConfig:
        """Build a config from `<prefix><FIELD_NAME>` environment variables.

        A `.env` file in the working directory is loaded first; variables that
        are already set take precedence over it.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        values: dict[str, int] = {}
        for f in fields(cls):
            env_name = f"{prefix}{f.name.upper()}"
            raw = os.getenv(env_name)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[f.name] = int(raw)
            except ValueError:
                raise ConfigError(f"{env_name} must be an integer, got {raw!r}") from None
        return cls(**values)


DEFAULT_CONFIG = LayoutConfig()
