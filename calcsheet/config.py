from __future__ import annotations

"""
Sheet configuration.

A small dataclass with safe defaults plus a YAML loader. File values are
coerced and validated here so the store can assume a well-formed config.

Example `calcsheet.yaml`:

    column_count: 3
    duplicate_keys: suffix
    placeholder: "Row {n}"
"""

from dataclasses import dataclass, asdict, replace
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)


DEFAULT_COLUMN_COUNT = 5
DUPLICATE_KEY_POLICIES = ("suffix", "overwrite")


def coerce_column_count(value: Any) -> int:
    """Return `value` as a positive int or raise ValueError.

    Integral floats (3.0) and numeric strings ("3") are accepted; bools are not.
    """
    if isinstance(value, bool):
        raise ValueError(f"column_count must be a positive integer, got {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"column_count must be a positive integer, got {value!r}") from None
    if not as_float.is_integer() or as_float < 1:
        raise ValueError(f"column_count must be a positive integer, got {value!r}")
    return int(as_float)


@dataclass(frozen=True)
class SheetConfig:
    """Settings for a calculation sheet.

    - column_count: number of numeric columns (label column excluded)
    - duplicate_keys: how `export()` resolves rows that share a row key;
      "suffix" appends " (2)", " (3)", ... to later rows, "overwrite" keeps
      only the last row with that key
    - placeholder: export key for rows with an empty label; `{n}` is the
      1-based row position
    """

    column_count: int = DEFAULT_COLUMN_COUNT
    duplicate_keys: str = "suffix"
    placeholder: str = "Row {n}"

    def __post_init__(self) -> None:
        object.__setattr__(self, "column_count", coerce_column_count(self.column_count))
        policy = str(self.duplicate_keys).strip().lower()
        if policy not in DUPLICATE_KEY_POLICIES:
            raise ValueError(
                f"duplicate_keys must be one of {', '.join(DUPLICATE_KEY_POLICIES)}, got {self.duplicate_keys!r}"
            )
        object.__setattr__(self, "duplicate_keys", policy)
        placeholder = str(self.placeholder)
        if "{n}" not in placeholder:
            raise ValueError("placeholder must contain '{n}'")
        try:
            placeholder.format(n=1)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"placeholder {placeholder!r} is not a valid template: {exc}") from None
        object.__setattr__(self, "placeholder", placeholder)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SheetConfig":
        """Build a config from a mapping; unknown keys are ignored."""
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
        known = {k: data[k] for k in ("column_count", "duplicate_keys", "placeholder") if k in data}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**known)

    def with_overrides(self, **kwargs: Any) -> "SheetConfig":
        """Return a copy with the non-None keyword values applied."""
        changes = {k: v for k, v in kwargs.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Path) -> SheetConfig:
    """Load a YAML config file. A missing file yields the defaults."""
    path = Path(path)
    if not path.exists():
        logger.debug("No config file at %s; using defaults", path)
        return SheetConfig()
    text = path.read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    config = SheetConfig.from_dict(data)
    logger.info("Loaded config from %s: %s", path, config.to_dict())
    return config


__all__ = [
    "DEFAULT_COLUMN_COUNT",
    "DUPLICATE_KEY_POLICIES",
    "SheetConfig",
    "coerce_column_count",
    "load_config",
]
