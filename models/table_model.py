from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Sequence

import pandas as pd


class ColumnKind(Enum):
    INT = "int"
    TEXT = "text"


class SortDirection(Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"

    def toggled(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


@dataclass(frozen=True)
class FilterSpec:
    column: str
    text: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.text)


@dataclass(frozen=True)
class SortSpec:
    column: str
    direction: SortDirection = SortDirection.ASCENDING


class TableData:
    """
    Represents the loaded CSV in memory:
      - columns: ordered column names
      - kinds: one ColumnKind per column (first INT, the rest TEXT)
      - frame: pandas DataFrame holding the rows, one column per name
    """

    def __init__(self, columns: Sequence[str], rows: Optional[List[List[Any]]] = None,
                 kinds: Optional[Sequence[ColumnKind]] = None, frame: Optional[pd.DataFrame] = None):
        self.columns: List[str] = list(columns)
        if kinds is None:
            kinds = [ColumnKind.INT] + [ColumnKind.TEXT] * (len(self.columns) - 1)
        self.kinds: List[ColumnKind] = list(kinds)
        if len(self.kinds) != len(self.columns):
            raise ValueError("Column kinds do not match the column names.")

        if frame is None:
            frame = self._build_frame(self.columns, self.kinds, rows or [])
        elif list(frame.columns) != self.columns:
            raise ValueError("DataFrame columns do not match the column names.")
        self.frame: pd.DataFrame = frame.reset_index(drop=True)

    @staticmethod
    def _build_frame(columns: List[str], kinds: List[ColumnKind], rows: List[List[Any]]) -> pd.DataFrame:
        for i, row in enumerate(rows):
            if len(row) != len(columns):
                raise ValueError(f"Row {i} has {len(row)} values, expected {len(columns)}.")
        frame = pd.DataFrame(rows, columns=columns)
        for name, kind in zip(columns, kinds):
            if kind is ColumnKind.INT:
                frame[name] = frame[name].astype("int64")
            else:
                frame[name] = frame[name].astype(object)
        return frame

    @property
    def row_count(self) -> int:
        return len(self.frame)

    @property
    def rows(self) -> List[List[Any]]:
        out = []
        for record in self.frame.itertuples(index=False, name=None):
            out.append([
                int(value) if kind is ColumnKind.INT else value
                for value, kind in zip(record, self.kinds)
            ])
        return out

    def column_index(self, name: str) -> int:
        try:
            return self.columns.index(name)
        except ValueError:
            raise KeyError(name) from None

    def kind_of(self, name: str) -> ColumnKind:
        return self.kinds[self.column_index(name)]

    def with_frame(self, frame: pd.DataFrame) -> "TableData":
        """Builds a table with the same schema over another set of rows."""
        return TableData(self.columns, kinds=self.kinds, frame=frame)

    def copy(self) -> "TableData":
        return self.with_frame(self.frame.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableData):
            return NotImplemented
        return (
            self.columns == other.columns
            and self.kinds == other.kinds
            and self.rows == other.rows
        )

    def __repr__(self) -> str:
        return f"TableData(columns={self.columns!r}, rows={self.row_count})"
