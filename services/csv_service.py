import logging
import os
import re
from typing import List, Optional, Sequence

from models.table_model import ColumnKind, TableData

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
DEFAULT_ENCODINGS = ("utf-8-sig", "utf-8", "latin-1", "cp1252")

_INT_PATTERN = re.compile(r"^\s*[+-]?\d+\s*$", re.ASCII)
_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


class CSVServiceError(Exception):
    pass


class NotFoundError(CSVServiceError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"The file '{path}' could not be found.")


class ReadError(CSVServiceError):
    def __init__(self, path: str, reason: str = ""):
        self.path = path
        message = f"Error reading file '{path}'. The file may be in use by another program."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class FormatError(CSVServiceError):
    """
    A line of the file does not match the declared layout.
    line_number is 1-based and counts blank lines too.
    """

    def __init__(self, line_number: int, message: str, value: Optional[str] = None,
                 expected: Optional[int] = None, found: Optional[int] = None):
        self.line_number = line_number
        self.value = value
        self.expected = expected
        self.found = found
        super().__init__(f"Line {line_number}: {message}")


class EmptyDataError(CSVServiceError):
    def __init__(self, path: str):
        self.path = path
        super().__init__("No data was loaded. The file may be empty or incorrectly formatted.")


def parse_int_field(value: str, line_number: int) -> int:
    # 32-bit signed range; anything wider is rejected like non-numeric text
    if _INT_PATTERN.match(value):
        number = int(value)
        if _INT32_MIN <= number <= _INT32_MAX:
            return number
    raise FormatError(line_number, f"The value '{value}' in the first column is not an integer.", value=value)


class CSVService:
    """
    Reads the registration CSV into a typed table.
    - Header: first column is an integer id, the rest are text.
    - Rows: split on a fixed delimiter, no quoting.
    - UTF-8 (with or without BOM) first, ANSI code pages as fallback.
    """

    @staticmethod
    def read_lines(path: str, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> List[str]:
        if not os.path.exists(path):
            raise NotFoundError(path)

        last_error: Optional[UnicodeDecodeError] = None
        for enc in encodings:
            try:
                with open(path, "r", encoding=enc) as f:
                    lines = [line.rstrip("\n") for line in f]
                logger.debug("Read %d lines from %s using %s", len(lines), path, enc)
                return lines
            except UnicodeDecodeError as e:
                last_error = e
                continue
            except FileNotFoundError as e:
                raise NotFoundError(path) from e
            except OSError as e:
                raise ReadError(path, e.strerror or str(e)) from e

        raise ReadError(path, f"unsupported text encoding: {last_error}")

    @staticmethod
    def parse_lines(lines: Sequence[str], delimiter: str = DEFAULT_DELIMITER, source: str = "<memory>") -> TableData:
        columns: List[str] = []
        rows: List[list] = []

        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            values = line.split(delimiter)

            if not columns:
                columns = CSVService._parse_header(values, line_number)
                continue

            id_value = parse_int_field(values[0], line_number)
            if len(values) < len(columns):
                raise FormatError(
                    line_number,
                    f"Not enough columns. Expected {len(columns)}, found {len(values)}.",
                    expected=len(columns),
                    found=len(values),
                )
            if len(values) > len(columns):
                logger.debug("Line %d: dropping %d extra field(s)", line_number, len(values) - len(columns))

            rows.append([id_value] + values[1:len(columns)])

        if not rows:
            raise EmptyDataError(source)

        kinds = [ColumnKind.INT] + [ColumnKind.TEXT] * (len(columns) - 1)
        return TableData(columns=columns, rows=rows, kinds=kinds)

    @staticmethod
    def _parse_header(values: List[str], line_number: int) -> List[str]:
        columns = []
        unnamed = 0
        for raw in values:
            name = raw.strip()
            if not name:
                # unnamed columns count up from Column1, skipping names already taken
                unnamed += 1
                while f"Column{unnamed}" in columns:
                    unnamed += 1
                name = f"Column{unnamed}"
            if name in columns:
                raise FormatError(line_number, f"Duplicate column name '{name}'.", value=name)
            columns.append(name)
        return columns

    @staticmethod
    def read_csv(path: str, delimiter: str = DEFAULT_DELIMITER,
                 encodings: Sequence[str] = DEFAULT_ENCODINGS) -> TableData:
        lines = CSVService.read_lines(path, encodings)
        try:
            table = CSVService.parse_lines(lines, delimiter, source=path)
        except CSVServiceError as e:
            logger.warning("Rejected %s: %s", path, e)
            raise
        logger.info("Loaded %d rows x %d columns from %s", table.row_count, len(table.columns), path)
        return table
