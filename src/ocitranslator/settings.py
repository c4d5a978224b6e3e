from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()


# ==============================================================================
# Wire formats
# ==============================================================================
SFCC_NAMESPACE = "http://www.demandware.com/xml/impex/inventory/2007-05-31"

ENCODING = os.getenv("OCI_TRANSLATOR_ENCODING", "UTF-8")

DEFAULT_MODE = "UPDATE"
SUPPORTED_MODES = ("UPDATE",)

LAYOUT_GROUPED = "grouped"
LAYOUT_STREAMED = "streamed"
LAYOUTS = (LAYOUT_GROUPED, LAYOUT_STREAMED)

DEFAULT_LAYOUT = os.getenv("OCI_TRANSLATOR_LAYOUT", LAYOUT_GROUPED).strip().lower() or LAYOUT_GROUPED


# ==============================================================================
# Logging
# ==============================================================================
LOG_FILE = os.getenv("OCI_TRANSLATOR_LOG_FILE", "").strip() or None


def default_log_level() -> int:
    if os.getenv("DEBUG", "").strip():
        return logging.DEBUG
    name = os.getenv("OCI_TRANSLATOR_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
