"""Content models."""

from .block import Block, BlockKind

__all__ = ["Block", "BlockKind"]
