import logging
import tkinter as tk
import tkinter.font as tkfont
from tkinter import ttk

from models.table_model import SortDirection
from ui.header_search import HeaderSearchBox
from ui.tooltip import HeaderToolTip

logger = logging.getLogger(__name__)

HEADER_HINT = "Left click to search; Right click to sort"
SORT_GLYPHS = {SortDirection.ASCENDING: " ▲", SortDirection.DESCENDING: " ▼"}
CELL_PADDING = 20


class TableView(ttk.Frame):
    """
    Treeview grid over a TableData.
    on_filter(column, text), on_filter_closed(column) and on_sort(column) are
    called from header interaction; the owner decides what to redraw.
    """

    def __init__(self, parent, on_filter=None, on_filter_closed=None, on_sort=None,
                 tooltip_ms=2000, *args, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self.on_filter = on_filter
        self.on_filter_closed = on_filter_closed
        self.on_sort = on_sort

        tree_frame = ttk.Frame(self)
        tree_frame.pack(fill="both", expand=True)
        self._tree = ttk.Treeview(tree_frame, show="headings")
        self._tree.pack(side="left", fill="both", expand=True)
        self._scroll_y = ttk.Scrollbar(tree_frame, orient="vertical", command=self._tree.yview)
        self._scroll_y.pack(side="right", fill="y")
        self._tree.configure(yscrollcommand=self._scroll_y.set)
        self._scroll_x = ttk.Scrollbar(self, orient="horizontal", command=self._tree.xview)
        self._scroll_x.pack(side="bottom", fill="x")
        self._tree.configure(xscrollcommand=self._scroll_x.set)

        self._tree.bind("<Button-1>", self._on_left_click)
        self._tree.bind("<Button-3>", self._on_right_click)
        self._tree.bind("<Button-2>", self._on_right_click)
        self._tree.bind("<Motion>", self._on_motion)
        self._tree.bind("<Leave>", lambda e: self._tooltip.hide())
        self._tree.bind("<Configure>", self._on_resize)

        self._tooltip = HeaderToolTip(self._tree, HEADER_HINT, duration_ms=tooltip_ms)
        self._current_columns = []
        self._search_box = None

    # --- RENDER ---
    def clear(self):
        for r in self._tree.get_children(): self._tree.delete(r)
        self._tree["columns"] = ()

    def update_table(self, table):
        self.close_search_box()
        self.clear()
        if table is None: return
        self._current_columns = list(table.columns)
        self._tree["columns"] = tuple(self._current_columns)
        for col in self._current_columns:
            self._tree.heading(col, text=col)
            self._tree.column(col, anchor="w", stretch=False)
        self.set_sort_indicator(None, None)
        self.show_rows(table)

    def show_rows(self, table):
        """Replaces the rows only, so an open search box survives."""
        for r in self._tree.get_children(): self._tree.delete(r)
        if table is None: return
        for row in table.rows:
            self._tree.insert("", "end", values=tuple("" if v is None else str(v) for v in row))
        self.resize_columns()

    def set_sort_indicator(self, sort_column, sort_direction):
        for col in self._current_columns:
            glyph = SORT_GLYPHS.get(sort_direction, "") if col == sort_column else ""
            self._tree.heading(col, text=f"{col}{glyph}")

    def resize_columns(self):
        try:
            self._resize_columns_to_content()
        except tk.TclError as e:
            logger.debug("Error resizing columns: %s", e)

    def _resize_columns_to_content(self):
        if not self._current_columns: return
        heading_font = tkfont.nametofont("TkHeadingFont")
        cell_font = tkfont.nametofont("TkDefaultFont")
        last = len(self._current_columns) - 1
        items = self._tree.get_children()
        for i, col in enumerate(self._current_columns):
            if i == last:
                self._tree.column(col, stretch=True)
                continue
            width = heading_font.measure(self._tree.heading(col, "text")) + CELL_PADDING
            for item in items:
                value = str(self._tree.set(item, col))
                width = max(width, cell_font.measure(value) + CELL_PADDING)
            self._tree.column(col, width=width, stretch=False)

    def _on_resize(self, event=None):
        self.resize_columns()

    # --- HEADER EVENTS ---
    def _heading_column(self, event):
        if self._tree.identify_region(event.x, event.y) != "heading":
            return None
        col_id = self._tree.identify_column(event.x)
        try:
            index = int(col_id.lstrip("#")) - 1
        except ValueError:
            return None
        if 0 <= index < len(self._current_columns):
            return self._current_columns[index]
        return None

    def _on_left_click(self, event):
        column = self._heading_column(event)
        if column is None: return
        self.open_search_box(column)
        return "break"

    def _on_right_click(self, event):
        column = self._heading_column(event)
        if column is None: return
        self.close_search_box()
        if self.on_sort:
            self.on_sort(column)
        return "break"

    def _on_motion(self, event):
        if self._heading_column(event) is None:
            if self._tooltip.visible: self._tooltip.hide()
            return
        if not self._tooltip.visible:
            self._tooltip.show(event.x_root, event.y_root)

    # --- SEARCH BOX ---
    def _heading_bounds(self, column):
        index = self._current_columns.index(column)
        x = 0
        for col in self._current_columns[:index]:
            x += int(self._tree.column(col, "width"))
        total = sum(int(self._tree.column(c, "width")) for c in self._current_columns)
        x -= int(self._tree.xview()[0] * total)
        width = int(self._tree.column(column, "width"))
        height = 24
        items = self._tree.get_children()
        if items:
            bbox = self._tree.bbox(items[0], column)
            if bbox:
                x, width, height = bbox[0], bbox[2], max(bbox[1], 1)
        return x, 0, width, height

    def open_search_box(self, column):
        self.close_search_box()
        self._search_box = HeaderSearchBox(
            self._tree, column, self._heading_bounds(column),
            on_change=self._handle_search_change,
            on_close=self._handle_search_close,
        )

    def close_search_box(self):
        box, self._search_box = self._search_box, None
        if box is not None:
            box.close()

    def _handle_search_change(self, column, text):
        if self.on_filter:
            self.on_filter(column, text)

    def _handle_search_close(self, column):
        if self._search_box is not None and self._search_box.closed:
            self._search_box = None
        if self.on_filter_closed:
            self.on_filter_closed(column)
