import logging
import os
from dataclasses import dataclass
from typing import Optional

from models.table_model import FilterSpec, SortDirection, SortSpec, TableData
from services.csv_service import DEFAULT_DELIMITER, CSVService, CSVServiceError
from services.view_service import FilterError, derive_view, next_direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusInfo:
    row_text: str
    detail_text: str


class TableContext:
    def __init__(self):
        self.canonical: TableData | None = None
        self.view: TableData | None = None
        self.filter: FilterSpec | None = None
        self.sort_column: str | None = None
        self.sort_direction: SortDirection | None = None
        self.status: StatusInfo = StatusInfo("No data loaded", "")


class TableController:
    def __init__(self, delimiter: str = DEFAULT_DELIMITER):
        self.delimiter = delimiter
        self.context = TableContext()

    @property
    def canonical(self) -> Optional[TableData]:
        return self.context.canonical

    @property
    def view(self) -> Optional[TableData]:
        return self.context.view

    def has_data(self) -> bool:
        return self.context.canonical is not None

    # --- LOAD ---
    def load_csv(self, path: str) -> TableData:
        """Replaces the canonical table, or leaves everything as it was on failure."""
        ctx = self.context
        try:
            table = CSVService.read_csv(path, delimiter=self.delimiter)
        except CSVServiceError as e:
            self.report_error(str(e))
            raise

        ctx.canonical = table
        ctx.view = table.copy()
        ctx.filter = None
        ctx.sort_column = None
        ctx.sort_direction = None
        self._set_status(f"Rows: {table.row_count}", f"File: {os.path.basename(path)}")
        return ctx.view

    # --- FILTER / SORT ---
    def apply_filter(self, column: str, text: str) -> Optional[TableData]:
        ctx = self.context
        if not self.has_data():
            return None
        if not text:
            return self.reset()

        spec = FilterSpec(column=column, text=text)
        try:
            view = derive_view(ctx.canonical, filter_spec=spec)
        except Exception as e:
            logger.exception("Filter on column '%s' failed", column)
            ctx.view = ctx.canonical.copy()
            ctx.filter = None
            self._set_status(f"Rows: {ctx.canonical.row_count}", "Filter error - showing all data")
            raise FilterError(
                f"Error applying filter to column '{column}'. "
                f"The filter text '{text}' may contain invalid characters."
            ) from e

        ctx.view = view
        ctx.filter = spec
        ctx.sort_column = None
        ctx.sort_direction = None
        self._set_status(
            f"Rows: {view.row_count} of {ctx.canonical.row_count}",
            f"Filter: {column} contains '{text}'",
        )
        return view

    def toggle_sort(self, column: str) -> Optional[TableData]:
        ctx = self.context
        if not self.has_data():
            return None

        direction = next_direction(ctx.sort_column, ctx.sort_direction, column)
        view = derive_view(ctx.canonical, sort_spec=SortSpec(column=column, direction=direction))
        logger.debug("Sorted by %s (%s)", column, direction.value)

        ctx.view = view
        ctx.filter = None
        ctx.sort_column = column
        ctx.sort_direction = direction
        self._set_status(f"Rows: {view.row_count}", f"Sorted by: {column} ({direction.value})")
        return view

    def sort_indicator(self, column: str) -> Optional[SortDirection]:
        if self.context.sort_column == column:
            return self.context.sort_direction
        return None

    def reset(self) -> Optional[TableData]:
        ctx = self.context
        if not self.has_data():
            return None
        ctx.view = derive_view(ctx.canonical)
        ctx.filter = None
        ctx.sort_column = None
        ctx.sort_direction = None
        self._set_status(f"Rows: {ctx.canonical.row_count}", "No filter applied")
        return ctx.view

    # --- STATUS ---
    def status(self) -> StatusInfo:
        return self.context.status

    def report_error(self, message: str) -> StatusInfo:
        self._set_status(self.context.status.row_text, f"Error: {message}")
        return self.context.status

    def _set_status(self, row_text: str, detail_text: str):
        self.context.status = StatusInfo(row_text, detail_text)
