"""
Pagination engine: configuration, page model, greedy paginator and validator.
"""

from .pagination_config import PaginationConfig
from .unified_layout import LayoutPage, PaginatedLayout, Placement
from .pagination_manager import PaginationManager, paginate
from .layout_validator import LayoutValidator

__all__ = [
    "PaginationConfig",
    "LayoutPage",
    "PaginatedLayout",
    "Placement",
    "PaginationManager",
    "paginate",
    "LayoutValidator",
]
