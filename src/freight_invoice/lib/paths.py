"""
Path helpers for locating the editor's on-disk data.
"""

import os
import tempfile
from pathlib import Path

_DATA_DIR_KEY = "FREIGHT_INVOICE_DATA_DIR"


def temp_dir() -> Path:
    """Return the system temporary directory as a Path."""
    return Path(tempfile.gettempdir())


def data_dir() -> Path:
    """
    Return the directory holding the saved invoice slot.

    Uses FREIGHT_INVOICE_DATA_DIR when set, otherwise a folder under the
    system temporary directory.

    Returns:
        Path to the data directory (not created here).
    """
    configured = os.getenv(_DATA_DIR_KEY, "").strip()
    if configured:
        return Path(configured).expanduser()
    return temp_dir() / "freight_invoice"
