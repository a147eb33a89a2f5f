"""

Pagination Manager for spreadsheet blocks.

Handles:
- greedy left-to-right placement of blocks into fixed-capacity pages
- continuation notes when a group spans a page boundary
- section spacing between groups
- oversized blocks (placed alone on their own page)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import partial, reduce
from math import isfinite
from numbers import Real
from typing import Any, Iterable, Mapping, Optional, Set, Tuple, Union

from ..models.block import Block, BlockKind
from ..utils.exceptions import MalformedBlockError
from .pagination_config import PaginationConfig
from .unified_layout import LayoutPage, PaginatedLayout, Placement

logger = logging.getLogger(__name__)

# Persistent singly linked list: (head, tail) pairs, newest item first.
_Chain = Optional[Tuple[Any, "_Chain"]]


def _unwind(chain: _Chain) -> Tuple[Any, ...]:
    """Materializes a chain in insertion order."""
    items = []
    while chain is not None:
        item, chain = chain
        items.append(item)
    items.reverse()
    return tuple(items)


@dataclass(frozen=True)
class _FoldState:
    """
    Accumulator of the pagination fold. Every step returns a new state.

    Pages and placements are consed onto chains so a step never copies what
    was accumulated before it; tuples are built once per sealed page.
    """
    sealed: _Chain = None
    page_count: int = 0
    current: _Chain = None
    used: float = 0
    started: bool = False
    last_group: Optional[str] = None
    group_title: Any = None

    def place(self, placement: Placement, units: float) -> "_FoldState":
        return replace(self, current=(placement, self.current), used=self.used + units)

    def seal(self, overflow: bool = False) -> "_FoldState":
        if self.current is None:
            return self
        page = LayoutPage(number=self.page_count + 1, placements=_unwind(self.current), overflow=overflow)
        return replace(self, sealed=(page, self.sealed), page_count=self.page_count + 1, current=None, used=0)

    def pages(self) -> Tuple[LayoutPage, ...]:
        return _unwind(self.seal().sealed)


class PaginationManager:
    """

    Greedy single-pass paginator.

    Blocks are atomic and never reordered. A page is sealed as soon as the
    next block does not fit; the next page starts with a continuation note
    when the block continues the group of the sealed page.

    """

    def __init__(self, config: Union[PaginationConfig, Mapping[str, Any], None] = None):
        """

        Args:
        config: PaginationConfig or mapping of options (defaults when None)

        """
        self.config = PaginationConfig.coerce(config)

    def paginate(self, blocks: Iterable[Block]) -> PaginatedLayout:
        """

        Partitions blocks into pages.

        Args:
        blocks: Blocks in document order

        Returns:
        PaginatedLayout with sealed pages (empty for empty input)

        Raises:
        MalformedBlockError: at the first block that cannot be placed

        """
        step = partial(self._step, seen_groups=set())
        pages = reduce(step, enumerate(blocks), _FoldState()).pages()
        layout = PaginatedLayout(pages=pages, config=self.config)

        logger.info(
            f"Paginated {sum(len(page) for page in pages) - layout.continuation_count} blocks "
            f"into {len(pages)} pages ({layout.continuation_count} continuation notes)"
        )
        for page in pages:
            logger.debug(
                f"Page {page.number}: blocks={len(page)}, units={page.total_units}"
                f"{' (overflow)' if page.overflow else ''}"
            )
        return layout

    def _step(self, state: _FoldState, item: Tuple[int, Block], seen_groups: Set[str]) -> _FoldState:
        index, block = item
        self._validate_block(index, block)

        group_id = block.group_id
        new_group = state.started and group_id != state.last_group
        continues_group = state.started and group_id is not None and not new_group

        if new_group and group_id in seen_groups:
            raise MalformedBlockError(
                f"Group '{group_id}' is not contiguous: block {index} reopens it",
                block_index=index,
                block=block,
            )
        if group_id is not None:
            seen_groups.add(group_id)

        if block.kind is BlockKind.GROUP_HEADER:
            title = block.content
        elif new_group or not state.started:
            title = None
        else:
            title = state.group_title

        state = replace(
            state,
            started=True,
            last_group=group_id,
            group_title=title,
        )

        cost = self.config.cost_of(block)
        capacity = self.config.rows_per_page

        if cost > capacity:
            logger.debug(f"Block {index} ({block.kind.value}) costs {cost} > {capacity}, placed alone")
            state = state.seal()
            return state.place(Placement(block, cost), cost).seal(overflow=True)

        spacing = self.config.section_spacing_units if new_group and state.current else 0
        if state.current and state.used + spacing + cost <= capacity:
            return state.place(Placement(block, cost, spacing_before=spacing), spacing + cost)

        return self._open_page(state.seal(), block, cost, continues_group)

    def _open_page(self, state: _FoldState, block: Block, cost: float, continues_group: bool) -> _FoldState:
        if continues_group:
            note = Block.continuation_note(
                state.group_title if state.group_title is not None else block.group_id,
                block.group_id,
            )
            note_cost = self.config.cost_of(note)
            if note_cost + cost <= self.config.rows_per_page:
                state = state.place(Placement(note, note_cost), note_cost)
            else:
                logger.debug(f"Continuation note for group '{block.group_id}' dropped: block fills the page")
        return state.place(Placement(block, cost), cost)

    @staticmethod
    def _validate_block(index: int, block: Any) -> None:
        if not isinstance(block, Block):
            raise MalformedBlockError(f"Item {index} is not a Block: {block!r}", block_index=index, block=block)
        if not isinstance(block.kind, BlockKind):
            raise MalformedBlockError(
                f"Block {index} has unrecognized kind {block.kind!r}", block_index=index, block=block
            )
        if block.content is None:
            raise MalformedBlockError(f"Block {index} has no content", block_index=index, block=block)
        units = block.units
        if units is not None and (
            isinstance(units, bool) or not isinstance(units, Real) or not isfinite(units) or units < 0
        ):
            raise MalformedBlockError(
                f"Block {index} has invalid units {units!r}", block_index=index, block=block
            )


def paginate(
    blocks: Iterable[Block],
    config: Union[PaginationConfig, Mapping[str, Any], None] = None,
) -> PaginatedLayout:
    """Paginates blocks with the given configuration (see PaginationManager)."""
    return PaginationManager(config).paginate(blocks)
