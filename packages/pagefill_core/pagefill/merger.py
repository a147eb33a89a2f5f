"""

Document Merger - places generated pages between pages of an attachment.

The composition is "cover + content + closing": the leading pages of the
attachment, then every generated page, then the closing page of the
attachment. Attachment pages in between are not emitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union
import logging

from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PyPdfError

from .utils.exceptions import AssemblyError, ConfigurationError

logger = logging.getLogger(__name__)

PdfSource = Union[bytes, bytearray, str, Path, PdfReader]


class PageSource(Enum):
    """Which input a page of the assembled document comes from."""
    ATTACHMENT = "attachment"
    GENERATED = "generated"


@dataclass(frozen=True)
class AssemblyPolicy:
    """
    Attachment page selection.

    Attributes:
        leading_pages: Attachment pages emitted before the generated pages
        closing_pages: Attachment pages emitted after them, taken from the end
            and never overlapping the leading pages
    """
    leading_pages: int = 2
    closing_pages: int = 1

    def __post_init__(self) -> None:
        for name in ("leading_pages", "closing_pages"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigurationError(
                    f"AssemblyPolicy.{name} must be a non-negative integer, got {value!r}",
                    option_name=name,
                    option_value=value,
                )


def assembly_plan(
    attachment_count: int,
    generated_count: int,
    policy: Optional[AssemblyPolicy] = None,
) -> List[Tuple[PageSource, int]]:
    """

    Computes the page order of the assembled document.

    Args:
    attachment_count: Number of attachment pages (A)
    generated_count: Number of generated pages (G)
    policy: Attachment page selection (defaults: two leading, one closing)

    Returns:
    List of (source, zero-based page index) in output order

    """
    if attachment_count < 0 or generated_count < 0:
        raise ValueError("Page counts must be non-negative")
    policy = policy or AssemblyPolicy()

    leading = min(attachment_count, policy.leading_pages)
    closing_start = max(leading, attachment_count - policy.closing_pages)

    plan = [(PageSource.ATTACHMENT, index) for index in range(leading)]
    plan.extend((PageSource.GENERATED, index) for index in range(generated_count))
    plan.extend((PageSource.ATTACHMENT, index) for index in range(closing_start, attachment_count))
    return plan


def assemble(
    attachment: Sequence[Any],
    generated: Sequence[Any],
    policy: Optional[AssemblyPolicy] = None,
) -> List[Any]:
    """

    Orders pages of two page sequences into the final sequence.

    Inputs only need len() and indexing; they are not modified. The result
    is a new list holding the selected page objects.

    Args:
    attachment: Externally supplied pages
    generated: Rendered pages of the paginated layout
    policy: Attachment page selection

    Returns:
    Final page sequence

    """
    sources = {PageSource.ATTACHMENT: attachment, PageSource.GENERATED: generated}
    plan = assembly_plan(len(attachment), len(generated), policy)
    return [sources[source][index] for source, index in plan]


class PDFAssembler:
    """

    Merges an attachment PDF with the generated PDF following an AssemblyPolicy.

    """

    def __init__(self, policy: Optional[AssemblyPolicy] = None):
        self.policy = policy or AssemblyPolicy()

    def merge(self, attachment: Optional[PdfSource], generated: Optional[PdfSource]) -> bytes:
        """

        Builds the final PDF.

        Args:
        attachment: Attachment PDF (bytes, path or PdfReader); None counts as zero pages
        generated: Generated PDF; None counts as zero pages

        Returns:
        Bytes of the merged PDF

        Raises:
        AssemblyError: if an input cannot be read or the output cannot be written

        """
        attachment_pages = self._pages(attachment, "attachment")
        generated_pages = self._pages(generated, "generated")

        pages = assemble(attachment_pages, generated_pages, self.policy)
        logger.info(
            f"Assembling {len(pages)} pages: attachment={len(attachment_pages)}, "
            f"generated={len(generated_pages)}"
        )

        writer = PdfWriter()
        try:
            for page in pages:
                writer.add_page(page)
            buffer = BytesIO()
            writer.write(buffer)
        except (PyPdfError, ValueError, KeyError) as exc:
            raise AssemblyError(f"Failed to write merged PDF: {exc}", source="merged", cause=exc) from exc
        return buffer.getvalue()

    def merge_to_file(
        self,
        attachment: Optional[PdfSource],
        generated: Optional[PdfSource],
        output_path: Union[str, Path],
    ) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(self.merge(attachment, generated))
        logger.info(f"Merged PDF saved as {output_path}")
        return output_path

    @staticmethod
    def _pages(source: Optional[PdfSource], label: str) -> Sequence[Any]:
        if source is None:
            return []
        reader = source if isinstance(source, PdfReader) else _open_reader(source, label)
        return reader.pages


def _open_reader(source: PdfSource, label: str) -> PdfReader:
    try:
        if isinstance(source, (bytes, bytearray)):
            return PdfReader(BytesIO(bytes(source)))
        return PdfReader(str(source))
    except (PyPdfError, OSError, ValueError) as exc:
        raise AssemblyError(f"Cannot read {label} PDF: {exc}", source=label, cause=exc) from exc


def merge_pdfs(
    attachment: Optional[PdfSource],
    generated: Optional[PdfSource],
    policy: Optional[AssemblyPolicy] = None,
) -> bytes:
    """Shortcut for PDFAssembler(policy).merge(attachment, generated)."""
    return PDFAssembler(policy).merge(attachment, generated)
