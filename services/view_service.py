import logging
from typing import Optional

import pandas as pd

from models.table_model import ColumnKind, FilterSpec, SortDirection, SortSpec, TableData

logger = logging.getLogger(__name__)


class FilterError(Exception):
    pass


def _require_column(table: TableData, column: str) -> None:
    if column not in table.columns:
        raise FilterError(f"Unknown column '{column}'.")


def filter_rows(canonical: TableData, spec: FilterSpec) -> TableData:
    """Rows whose rendered value in spec.column contains spec.text, original order kept."""
    _require_column(canonical, spec.column)
    if not spec.is_active:
        return canonical.copy()

    rendered = canonical.frame[spec.column].map(str)
    mask = rendered.str.contains(spec.text, regex=False)
    return canonical.with_frame(canonical.frame[mask].copy())


def sort_rows(table: TableData, spec: SortSpec) -> TableData:
    _require_column(table, spec.column)
    frame = table.frame
    if table.kind_of(spec.column) is ColumnKind.TEXT:
        key = frame[spec.column].map(str).str.casefold()
    else:
        key = frame[spec.column]

    # stable sort on a helper key keeps ties in file order
    order = pd.Series(key.values).sort_values(
        ascending=spec.direction is SortDirection.ASCENDING,
        kind="mergesort",
    ).index
    return table.with_frame(frame.iloc[order].copy())


def derive_view(canonical: TableData, filter_spec: Optional[FilterSpec] = None,
                sort_spec: Optional[SortSpec] = None) -> TableData:
    """
    Recomputes the view wholesale from the canonical table.
    The canonical table is never modified.
    """
    view = canonical.copy()
    if filter_spec is not None:
        view = filter_rows(view, filter_spec)
    if sort_spec is not None:
        view = sort_rows(view, sort_spec)
    logger.debug("Derived view: %d of %d rows (filter=%s, sort=%s)",
                 view.row_count, canonical.row_count, filter_spec, sort_spec)
    return view


def next_direction(previous_column: Optional[str], previous_direction: Optional[SortDirection],
                   column: str) -> SortDirection:
    if previous_column == column and previous_direction is not None:
        return previous_direction.toggled()
    return SortDirection.ASCENDING
