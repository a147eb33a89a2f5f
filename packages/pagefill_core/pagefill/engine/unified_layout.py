"""

Paginated layout model - final page structure ready for rendering.

"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..models.block import Block
from .pagination_config import PaginationConfig


@dataclass(frozen=True, slots=True)
class Placement:
    """A block placed on a page together with the units it consumed."""
    block: Block
    units: float
    spacing_before: float = 0

    @property
    def total_units(self) -> float:
        return self.units + self.spacing_before


@dataclass(frozen=True, slots=True)
class LayoutPage:
    """Sealed page with its placed blocks."""
    number: int
    placements: Tuple[Placement, ...] = ()
    overflow: bool = False  # single oversized block placed alone

    @property
    def blocks(self) -> Tuple[Block, ...]:
        return tuple(placement.block for placement in self.placements)

    @property
    def total_units(self) -> float:
        return sum(placement.total_units for placement in self.placements)

    @property
    def group_ids(self) -> List[Optional[str]]:
        seen: List[Optional[str]] = []
        for block in self.blocks:
            if block.group_id not in seen:
                seen.append(block.group_id)
        return seen

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.placements)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "total_units": self.total_units,
            "overflow": self.overflow,
            "blocks": [
                dict(placement.block.to_dict(), units=placement.units, spacing_before=placement.spacing_before)
                for placement in self.placements
            ],
        }


@dataclass(frozen=True)
class PaginatedLayout:
    """Ordered pages of a document plus the configuration that produced them."""
    pages: Tuple[LayoutPage, ...] = ()
    config: PaginationConfig = field(default_factory=PaginationConfig)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[LayoutPage]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    def __getitem__(self, index: int) -> LayoutPage:
        return self.pages[index]

    def iter_blocks(self, include_synthesized: bool = True) -> Iterator[Block]:
        for page in self.pages:
            for block in page.blocks:
                if include_synthesized or not block.is_synthesized:
                    yield block

    @property
    def continuation_count(self) -> int:
        return sum(1 for block in self.iter_blocks() if block.is_synthesized)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "page_count": self.page_count,
            "pages": [page.to_dict() for page in self.pages],
        }
