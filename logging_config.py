from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> None:
    """
    Route all checkreg loggers through one handler on the root logger.

    Load results and rejected files are logged by the CSV service, filter
    failures and UI errors by the controller and main window. Output is plain
    text for a desktop session; force_format="json" (or CHECKREG_LOG_FORMAT=json)
    switches to one JSON object per record.
    """

    if force_format is not None:
        format_mode = force_format
    else:
        format_mode = os.getenv("CHECKREG_LOG_FORMAT", "plain").lower()

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler()

    if format_mode == "json":
        formatter = jsonlogger.JsonFormatter(LOG_FORMAT)
    else:
        formatter = logging.Formatter(LOG_FORMAT)

    handler.setFormatter(formatter)

    # one handler only, even when called twice
    root.handlers.clear()
    root.addHandler(handler)
