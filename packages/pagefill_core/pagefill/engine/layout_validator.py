"""

Layout Validator - PaginatedLayout validation.

Checks:
- whether pages stay within capacity (except single-block overflow pages)
- whether source blocks appear in input order, none lost or duplicated
- whether continuation notes only open pages
- whether page numbers are consecutive

"""

from typing import List, Optional, Sequence, Tuple

from ..models.block import Block
from .unified_layout import PaginatedLayout


class LayoutValidator:
    """Layout validator - checks PaginatedLayout integrity."""

    def __init__(self, layout: PaginatedLayout, source_blocks: Optional[Sequence[Block]] = None):
        """
        Args:
            layout: PaginatedLayout to validate
            source_blocks: Blocks that were paginated (enables order/conservation checks)
        """
        self.layout = layout
        self.source_blocks = list(source_blocks) if source_blocks is not None else None
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate(self) -> Tuple[bool, List[str], List[str]]:
        """

        Performs full layout validation.

        Returns:
        Tuple (is_valid, errors, warnings)

        """
        self.errors.clear()
        self.warnings.clear()

        self._validate_page_numbers()
        self._validate_capacity()
        self._validate_continuation_notes()
        if self.source_blocks is not None:
            self._validate_order_and_conservation()

        is_valid = len(self.errors) == 0
        return is_valid, self.errors.copy(), self.warnings.copy()

    def _validate_page_numbers(self) -> None:
        for expected, page in enumerate(self.layout.pages, start=1):
            if page.number != expected:
                self.errors.append(f"Page {expected} is numbered {page.number}")
            if not page.placements:
                self.errors.append(f"Page {page.number} is empty")

    def _validate_capacity(self) -> None:
        capacity = self.layout.config.rows_per_page
        for page in self.layout.pages:
            if page.overflow:
                if len(page) != 1:
                    self.errors.append(f"Overflow page {page.number} holds {len(page)} blocks")
                else:
                    self.warnings.append(
                        f"Page {page.number} overflows capacity ({page.total_units} > {capacity})"
                    )
                continue
            if page.total_units > capacity:
                self.errors.append(
                    f"Page {page.number} exceeds capacity ({page.total_units} > {capacity})"
                )

    def _validate_continuation_notes(self) -> None:
        for page in self.layout.pages:
            for position, block in enumerate(page.blocks):
                if block.is_synthesized and position != 0:
                    self.errors.append(
                        f"Continuation note at position {position} on page {page.number}"
                    )

    def _validate_order_and_conservation(self) -> None:
        placed = list(self.layout.iter_blocks(include_synthesized=False))
        source = self.source_blocks or []
        if len(placed) != len(source):
            self.errors.append(f"Placed {len(placed)} blocks, expected {len(source)}")
            return
        for index, (expected, actual) in enumerate(zip(source, placed)):
            if expected is not actual:
                self.errors.append(f"Block {index} is out of order or altered")
                return
