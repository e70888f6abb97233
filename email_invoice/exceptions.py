"""
Errors raised while decoding an X-Invoice header value.
"""

from typing import Optional


class InvoiceHeaderError(ValueError):
    """Base class for every error raised by the header codec."""


class MalformedHeaderError(InvoiceHeaderError):
    """The header value is not JSON, or is JSON but not an object."""


class HeaderValidationError(InvoiceHeaderError):
    """
    The header value is a JSON object that violates the header schema.

    Attributes:
        errors: Every violation found, as ``category:field`` codes
            (e.g. ``missing_field:issuer``, ``type_error:amount``)
    """

    def __init__(self, errors: list[str], message: Optional[str] = None) -> None:
        super().__init__(message or f"Invalid {len(errors)} field(s): {', '.join(errors)}")
        self.errors = list(errors)

    @property
    def fields(self) -> list[str]:
        """Wire names of the offending fields, in reporting order."""
        return [code.split(":", 1)[-1] for code in self.errors]
