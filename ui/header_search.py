import logging
import tkinter as tk
from tkinter import ttk

logger = logging.getLogger(__name__)


class HeaderSearchBox:
    """
    Inline search entry laid over one column heading.
    One instance per filter session: created on header click, destroyed on
    Enter / Escape / focus loss. on_change(column, text) runs on every edit,
    on_close(column) once when the box goes away.
    """

    def __init__(self, tree, column, bounds, on_change, on_close):
        self.column = column
        self.on_change = on_change
        self.on_close = on_close
        self._closed = False

        x, y, width, height = bounds
        self.text_var = tk.StringVar(master=tree)
        self.entry = ttk.Entry(tree, textvariable=self.text_var)
        self.entry.place(x=x, y=y, width=width, height=height)
        self.text_var.trace_add("write", self._on_text_changed)

        self.entry.bind("<Return>", lambda e: self.close())
        self.entry.bind("<Escape>", lambda e: self.close())
        self.entry.bind("<FocusOut>", lambda e: self.close())
        self.entry.focus_set()

    @property
    def closed(self):
        return self._closed

    def _on_text_changed(self, *_):
        if self._closed:
            return
        self.on_change(self.column, self.text_var.get())

    def close(self):
        if self._closed:
            return
        self._closed = True
        try:
            self.entry.destroy()
        except tk.TclError as e:
            logger.debug("Search box already gone: %s", e)
        self.on_close(self.column)
