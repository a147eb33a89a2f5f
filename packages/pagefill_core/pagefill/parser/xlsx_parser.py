"""
XLSX parser - turns a worksheet into pagination blocks.

Sheet layout:
- the first non-empty row holds the column headers,
- a row with only its first cell filled is a group title (title-row mode),
  or groups are runs of equal values in a named column (group-column mode),
- every other non-empty row is a data row.
"""

from __future__ import annotations

from datetime import date, datetime, time
from io import BytesIO
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union
from zipfile import BadZipFile
import logging

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..models.block import Block
from ..utils.exceptions import ParsingError

logger = logging.getLogger(__name__)

SpreadsheetSource = Union[bytes, bytearray, str, Path]


def format_cell(value: Any) -> str:
    """Normalizes a cell value to display text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value).strip()


class XLSXParser:
    """
    Reads one worksheet and emits Blocks in document order.
    """

    def __init__(self, sheet_name: Optional[str] = None, group_column: Optional[str] = None):
        """
        Initialize parser.

        Args:
            sheet_name: Worksheet to read (active sheet when None)
            group_column: Header of the column that defines groups; when None,
                title rows define groups
        """
        self.sheet_name = sheet_name
        self.group_column = group_column

    def parse(self, source: SpreadsheetSource) -> List[Block]:
        """
        Parse a workbook from a path or raw bytes.

        Returns:
            Blocks in sheet order

        Raises:
            ParsingError: unreadable workbook, missing sheet or group column
        """
        file_path = None if isinstance(source, (bytes, bytearray)) else str(source)
        rows = self._read_rows(source, file_path)
        if not rows:
            logger.info("Worksheet is empty, no blocks produced")
            return []

        columns, data_rows = rows[0], rows[1:]
        if self.group_column is not None:
            blocks = self._blocks_by_column(columns, data_rows, file_path)
        else:
            blocks = self._blocks_by_title_rows(columns, data_rows)

        logger.info(f"Parsed {len(data_rows)} rows into {len(blocks)} blocks")
        return blocks

    def _read_rows(self, source: SpreadsheetSource, file_path: Optional[str]) -> List[List[str]]:
        try:
            stream = BytesIO(bytes(source)) if isinstance(source, (bytes, bytearray)) else str(source)
            workbook = load_workbook(stream, read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, OSError, KeyError, ValueError) as exc:
            raise ParsingError(f"Cannot open workbook: {exc}", file_path=file_path, cause=exc) from exc

        try:
            if self.sheet_name is None:
                sheet = workbook.active
            elif self.sheet_name in workbook.sheetnames:
                sheet = workbook[self.sheet_name]
            else:
                raise ParsingError(
                    f"Worksheet '{self.sheet_name}' not found (available: {', '.join(workbook.sheetnames)})",
                    file_path=file_path,
                    sheet_name=self.sheet_name,
                )
            rows = [
                [format_cell(value) for value in row]
                for row in sheet.iter_rows(values_only=True)
            ]
        finally:
            workbook.close()

        rows = [_trim(row) for row in rows if any(cell for cell in row)]
        width = max((len(row) for row in rows), default=0)
        return [row + [""] * (width - len(row)) for row in rows]

    def _blocks_by_title_rows(self, columns: List[str], rows: Sequence[List[str]]) -> List[Block]:
        blocks: List[Block] = []
        group_id: Optional[str] = None
        group_count = 0

        for row in rows:
            if _is_title_row(row):
                group_count += 1
                group_id = f"g{group_count}"
                blocks.append(Block.group_header(row[0], group_id))
                blocks.append(Block.table_header(tuple(columns), group_id))
                continue
            if group_id is None:
                group_count += 1
                group_id = f"g{group_count}"
                blocks.append(Block.table_header(tuple(columns), group_id))
            blocks.append(Block.data_row(tuple(row), group_id))
        return blocks

    def _blocks_by_column(
        self,
        columns: List[str],
        rows: Sequence[List[str]],
        file_path: Optional[str],
    ) -> List[Block]:
        if self.group_column not in columns:
            raise ParsingError(
                f"Group column '{self.group_column}' not found in header row",
                file_path=file_path,
                sheet_name=self.sheet_name,
                details={"columns": columns},
            )
        key = columns.index(self.group_column)
        table_columns = tuple(_without(columns, key))

        blocks: List[Block] = []
        current: Optional[str] = None
        group_id: Optional[str] = None
        group_count = 0
        for row in rows:
            value = row[key]
            if group_id is None or value != current:
                group_count += 1
                group_id = f"g{group_count}"
                current = value
                if value:
                    blocks.append(Block.group_header(value, group_id))
                blocks.append(Block.table_header(table_columns, group_id))
            blocks.append(Block.data_row(tuple(_without(row, key)), group_id))
        return blocks


def _trim(row: List[str]) -> List[str]:
    end = len(row)
    while end and not row[end - 1]:
        end -= 1
    return row[:end]


def _is_title_row(row: Sequence[str]) -> bool:
    return len(row) > 1 and bool(row[0]) and not any(row[1:])


def _without(row: Iterable[str], index: int) -> List[str]:
    return [cell for position, cell in enumerate(row) if position != index]


def parse_workbook(
    source: SpreadsheetSource,
    sheet_name: Optional[str] = None,
    group_column: Optional[str] = None,
) -> List[Block]:
    """Shortcut for XLSXParser(sheet_name, group_column).parse(source)."""
    return XLSXParser(sheet_name=sheet_name, group_column=group_column).parse(source)
