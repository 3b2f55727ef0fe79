import logging
import os
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from config import AppConfig
from controllers.table_controller import TableController
from services.view_service import FilterError
from ui.table_view import TableView

logger = logging.getLogger(__name__)


def innermost_error(ex: BaseException) -> BaseException:
    """Follows the exception chain down to the most specific cause."""
    seen = set()
    while ex.__cause__ is not None and id(ex) not in seen:
        seen.add(id(ex))
        ex = ex.__cause__
    return ex


class MainWindow:
    def __init__(self, config: AppConfig | None = None):
        self.config = config or AppConfig()
        self.controller = TableController(delimiter=self.config.delimiter)

        self.window = tk.Tk()
        self.window.title(self.config.title)
        self.window.geometry(self.config.geometry)
        self.window.protocol("WM_DELETE_WINDOW", self.on_closing)

        menubar = tk.Menu(self.window)
        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="Load Data", command=lambda: self.run_task("Loading data", self.load_data))
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.on_closing)
        menubar.add_cascade(label="File", menu=file_menu)
        self.window.config(menu=menubar)

        self.status_frame = ttk.Frame(self.window, relief=tk.SUNKEN, padding=(5, 2))
        self.status_frame.pack(side="bottom", fill="x")
        self.lbl_rows = ttk.Label(self.status_frame, anchor="w")
        self.lbl_rows.pack(side="left")
        ttk.Separator(self.status_frame, orient="vertical").pack(side="left", fill="y", padx=8)
        self.lbl_detail = ttk.Label(self.status_frame, anchor="w")
        self.lbl_detail.pack(side="left", fill="x", expand=True)

        self.table = TableView(
            self.window,
            on_filter=lambda col, text: self.run_task("Applying filter", lambda: self.apply_filter(col, text)),
            on_filter_closed=lambda col: self.run_task("Removing search box", self.clear_filter),
            on_sort=lambda col: self.run_task(f"Sorting column '{col}'", lambda: self.sort_by(col)),
            tooltip_ms=self.config.tooltip_ms,
        )
        self.table.pack(fill="both", expand=True)

        self.refresh_status()

    def run(self):
        self.window.mainloop()

    def run_task(self, description, func):
        try:
            func()
        except Exception as e:
            self.handle_exception(e, description)
        finally:
            self.refresh_status()

    def handle_exception(self, ex: BaseException, context: str):
        inner = innermost_error(ex)
        logger.error("ERROR in %s: %s", context, ex, exc_info=ex)
        self.controller.report_error(str(inner))
        self.refresh_status()
        messagebox.showerror("Error", f"An error occurred while {context.lower()}:\n\n{inner}")

    def refresh_status(self):
        try:
            status = self.controller.status()
            self.lbl_rows.config(text=status.row_text)
            self.lbl_detail.config(text=status.detail_text)
        except tk.TclError as e:
            logger.debug("Error updating status: %s", e)

    # --- ACTIONS ---
    def choose_file(self):
        path = self.config.default_path
        if path and os.path.exists(path):
            return path
        return filedialog.askopenfilename(
            title="Select a CSV file",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")],
        ) or None

    def load_data(self):
        path = self.choose_file()
        if not path: return
        # the box clears its filter on close, which must not overwrite the load status
        self.table.close_search_box()
        view = self.controller.load_csv(path)
        self.table.update_table(view)

    def apply_filter(self, column, text):
        try:
            view = self.controller.apply_filter(column, text)
        except FilterError:
            self.table.show_rows(self.controller.view)
            raise
        if view is None: return
        self.table.set_sort_indicator(None, None)
        self.table.show_rows(view)

    def clear_filter(self):
        view = self.controller.reset()
        if view is None: return
        self.table.set_sort_indicator(None, None)
        self.table.show_rows(view)

    def sort_by(self, column):
        view = self.controller.toggle_sort(column)
        if view is None: return
        self.table.set_sort_indicator(column, self.controller.sort_indicator(column))
        self.table.show_rows(view)

    def on_closing(self):
        self.window.destroy()
