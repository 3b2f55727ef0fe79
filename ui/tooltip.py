import logging
import tkinter as tk
from tkinter import ttk

logger = logging.getLogger(__name__)


class HeaderToolTip:
    """Small borderless hint window shown next to a widget for a fixed time."""

    def __init__(self, widget, text, duration_ms=2000):
        self.widget = widget
        self.text = text
        self.duration_ms = duration_ms
        self._window = None
        self._after_id = None

    def show(self, x_root, y_root):
        try:
            if self._window is None:
                self._window = tk.Toplevel(self.widget)
                self._window.wm_overrideredirect(True)
                ttk.Label(self._window, text=self.text, relief="solid", borderwidth=1, padding=(4, 2)).pack()
            self._window.wm_geometry(f"+{x_root + 12}+{y_root + 12}")
            self._window.deiconify()
            self._cancel_timer()
            self._after_id = self.widget.after(self.duration_ms, self.hide)
        except tk.TclError as e:
            logger.debug("Error showing tooltip: %s", e)

    def hide(self):
        try:
            self._cancel_timer()
            if self._window is not None:
                self._window.destroy()
        except tk.TclError as e:
            logger.debug("Error hiding tooltip: %s", e)
        finally:
            self._window = None

    @property
    def visible(self):
        return self._window is not None

    def _cancel_timer(self):
        if self._after_id is not None:
            self.widget.after_cancel(self._after_id)
            self._after_id = None
