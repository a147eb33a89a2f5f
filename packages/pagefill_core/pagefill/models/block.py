"""
Block model - one placeable unit derived from a spreadsheet row.

Blocks are created once by the parser and never edited afterwards:
pagination only groups them into pages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..utils.exceptions import MalformedBlockError


class BlockKind(Enum):
    """Closed set of block kinds understood by the pagination engine."""
    DATA_ROW = "data_row"
    TABLE_HEADER = "table_header"
    GROUP_HEADER = "group_header"
    CONTINUATION_NOTE = "continuation_note"

    @classmethod
    def parse(cls, value: Any) -> "BlockKind":
        """Accepts a BlockKind, its value ('data_row') or its name ('DataRow', 'DATA_ROW')."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip()
            for kind in cls:
                if normalized in (kind.value, kind.name) or normalized == _camel(kind):
                    return kind
        raise MalformedBlockError(f"Unknown block kind: {value!r}")


def _camel(kind: BlockKind) -> str:
    return "".join(part.capitalize() for part in kind.value.split("_"))


# Intrinsic cost when a block does not carry its own units
_DEFAULT_UNITS: Dict[BlockKind, float] = {
    BlockKind.DATA_ROW: 1,
    BlockKind.TABLE_HEADER: 0,
    BlockKind.GROUP_HEADER: 0,
    BlockKind.CONTINUATION_NOTE: 0,
}


@dataclass(frozen=True)
class Block:
    """
    Single placeable content unit.

    Attributes:
        kind: Block kind
        content: Opaque payload handed to renderers unchanged
        group_id: Logical section the block belongs to
        units: Intrinsic capacity cost (defaults per kind)
        synthesized: True only for continuation notes created during pagination
    """
    kind: BlockKind
    content: Any
    group_id: Optional[str] = None
    units: Optional[float] = None
    synthesized: bool = False

    @property
    def intrinsic_units(self) -> float:
        if self.units is not None:
            return self.units
        return _DEFAULT_UNITS.get(self.kind, 0)

    @property
    def is_synthesized(self) -> bool:
        return self.synthesized

    @classmethod
    def data_row(cls, cells: Any, group_id: Optional[str] = None, units: Optional[float] = None) -> "Block":
        return cls(BlockKind.DATA_ROW, cells, group_id, units)

    @classmethod
    def table_header(cls, columns: Any, group_id: Optional[str] = None) -> "Block":
        return cls(BlockKind.TABLE_HEADER, columns, group_id)

    @classmethod
    def group_header(cls, title: Any, group_id: Optional[str] = None) -> "Block":
        return cls(BlockKind.GROUP_HEADER, title, group_id)

    @classmethod
    def continuation_note(cls, title: Any, group_id: Optional[str]) -> "Block":
        return cls(BlockKind.CONTINUATION_NOTE, title, group_id, synthesized=True)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Block":
        """
        Builds a block from a plain mapping.

        Accepts snake_case or camelCase keys: kind, content, group_id/groupId, units/cost.

        Raises:
            MalformedBlockError: unknown kind or missing content
        """
        if "kind" not in data:
            raise MalformedBlockError("Block mapping has no 'kind'", details={"data": dict(data)})
        if "content" not in data:
            raise MalformedBlockError("Block mapping has no 'content'", details={"data": dict(data)})
        group_id = data.get("group_id", data.get("groupId"))
        units = data.get("units", data.get("cost"))
        return cls(
            kind=BlockKind.parse(data["kind"]),
            content=data["content"],
            group_id=None if group_id is None else str(group_id),
            units=units,
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "kind": self.kind.value,
            "content": list(self.content) if isinstance(self.content, tuple) else self.content,
            "group_id": self.group_id,
        }
        if self.units is not None:
            result["units"] = self.units
        if self.synthesized:
            result["synthesized"] = True
        return result
