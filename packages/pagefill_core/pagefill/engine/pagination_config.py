"""Pagination configuration - capacity and per-kind costs for one pagination run."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from math import isfinite
from numbers import Real
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from ..models.block import Block, BlockKind
from ..utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# camelCase option names used by callers that pass raw option mappings
_CAMEL_ALIASES = {
    "rowsPerPage": "rows_per_page",
    "groupHeaderUnits": "group_header_units",
    "tableHeaderUnits": "table_header_units",
    "continuedNoteUnits": "continued_note_units",
    "sectionSpacingUnits": "section_spacing_units",
}


@dataclass(frozen=True)
class PaginationConfig:
    """Immutable configuration for a pagination run.

    All values share the unit of block costs ("row slots"). Fractional
    values are accepted.
    """
    rows_per_page: float = 14
    group_header_units: float = 1
    table_header_units: float = 1
    continued_note_units: float = 1
    section_spacing_units: float = 0

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ConfigurationError(
                    f"Option '{item.name}' must be a number, got {value!r}",
                    option_name=item.name,
                    option_value=value,
                )
            if not isfinite(value):
                raise ConfigurationError(
                    f"Option '{item.name}' must be finite, got {value}",
                    option_name=item.name,
                    option_value=value,
                )
            if value < 0:
                raise ConfigurationError(
                    f"Option '{item.name}' must be non-negative, got {value}",
                    option_name=item.name,
                    option_value=value,
                )
        if self.rows_per_page <= 0:
            raise ConfigurationError(
                f"rows_per_page must be greater than 0, got {self.rows_per_page}",
                option_name="rows_per_page",
                option_value=self.rows_per_page,
            )

    def surcharge(self, kind: BlockKind) -> float:
        """Structural cost added on top of a block's intrinsic units."""
        if kind is BlockKind.GROUP_HEADER:
            return self.group_header_units
        if kind is BlockKind.TABLE_HEADER:
            return self.table_header_units
        if kind is BlockKind.CONTINUATION_NOTE:
            return self.continued_note_units
        return 0

    def cost_of(self, block: Block) -> float:
        """Placement cost of a block: intrinsic units plus kind surcharge."""
        return block.intrinsic_units + self.surcharge(block.kind)

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "PaginationConfig":
        """
        Builds a config from a mapping with snake_case or camelCase keys.

        Missing options keep their defaults.

        Raises:
            ConfigurationError: unknown option names or invalid values
        """
        known = {item.name for item in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in options.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown pagination option: {key}", option_name=key, option_value=value)
            values[name] = value
        return cls(**values)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PaginationConfig":
        """Loads a JSON object of options from disk."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Cannot read pagination config {path}: {exc}", cause=exc) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Pagination config {path} must contain a JSON object")
        logger.debug(f"Loaded pagination config from {path}: {data}")
        return cls.from_dict(data)

    @classmethod
    def coerce(cls, config: Union["PaginationConfig", Mapping[str, Any], None]) -> "PaginationConfig":
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        if isinstance(config, Mapping):
            return cls.from_dict(config)
        raise ConfigurationError(f"Unsupported pagination config: {config!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
