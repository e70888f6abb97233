"""
Configuration constants and enums for the X-Invoice header package.
"""

import logging
import os
from enum import Enum
from typing import Final

# ============================================================================
# Header Format
# ============================================================================

# Name of the email header carrying the encoded invoice metadata
HEADER_NAME: Final[str] = "X-Invoice"

# The only existing version of the format to date
SCHEMA_VERSION: Final[str] = "1.0"

# Versions the decoder accepts
SUPPORTED_VERSIONS: Final[frozenset[str]] = frozenset({SCHEMA_VERSION})

# ============================================================================
# HTML Escaping
# ============================================================================

# Characters replaced in string values when HTML escaping is enabled
HTML_ESCAPES: Final[dict[str, str]] = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "'": "\\u0027",
}

# ============================================================================
# Error Code Prefixes
# ============================================================================

class ErrorCategory(str, Enum):
    """Categories for header validation error codes."""
    MISSING_FIELD = "missing_field"
    TYPE_ERROR = "type_error"
    FORMAT_ERROR = "format_error"
    UNSUPPORTED_VERSION = "unsupported_version"


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO")

logger = logging.getLogger("email_invoice")


def setup_logging() -> logging.Logger:
    """Configure the root handler and return the package logger."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logger
