"""
X-Invoice Email Header

A versioned metadata schema describing an invoice attached to an email,
carried as JSON in the X-Invoice header, with its encoder and decoder.
"""

__version__ = "1.0.0"

from .config import HEADER_NAME, SCHEMA_VERSION
from .schemas import InvoiceHeader, EncodeOptions
from .codec import encode_header, decode_header
from .exceptions import InvoiceHeaderError, MalformedHeaderError, HeaderValidationError

__all__ = [
    "HEADER_NAME",
    "SCHEMA_VERSION",
    "InvoiceHeader",
    "EncodeOptions",
    "encode_header",
    "decode_header",
    "InvoiceHeaderError",
    "MalformedHeaderError",
    "HeaderValidationError",
]
