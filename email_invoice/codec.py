"""
Encoding and decoding of X-Invoice header values.

The header value is a flat JSON object whose keys, key order and value
representations are fixed by the field table in rules.py. These functions
are pure: no I/O and no shared state.
"""

import json
from decimal import Decimal
from typing import Any, Optional, Union

from .config import HTML_ESCAPES, logger
from .exceptions import HeaderValidationError, MalformedHeaderError
from .rules import HEADER_FIELDS, FieldKind
from .schemas import EncodeOptions, InvoiceHeader
from .validator import validate_payload


# ============================================================================
# Encoding
# ============================================================================

def _format_decimal(value: Any) -> str:
    """Render an amount as a JSON number without going through a binary float."""
    if isinstance(value, float):
        value = Decimal(repr(value))
    return str(Decimal(value))


def _format_string(value: str, escape_html: bool) -> str:
    text = json.dumps(value, ensure_ascii=False)
    if escape_html:
        for char, escaped in HTML_ESCAPES.items():
            text = text.replace(char, escaped)
    return text


def _format_value(kind: FieldKind, value: Any, escape_html: bool) -> str:
    if kind is FieldKind.DECIMAL:
        return _format_decimal(value)
    if kind is FieldKind.BOOLEAN:
        return "true" if value else "false"
    if kind is FieldKind.TIMESTAMP:
        return _format_string(value.isoformat(), escape_html)
    return _format_string(value, escape_html)


def _render(members: list[tuple[str, str]], pretty: bool) -> str:
    if pretty:
        body = ",\n".join(f"  {json.dumps(key)}: {value}" for key, value in members)
        return "{\n" + body + "\n}"
    return "{" + ",".join(f"{json.dumps(key)}:{value}" for key, value in members) + "}"


def encode_header(header: InvoiceHeader, options: Optional[EncodeOptions] = None) -> str:
    """
    Serialize an InvoiceHeader into an X-Invoice header value.

    Optional fields without a value are left out of the object rather
    than written as null. Timestamps keep the offset they were given, and
    the amount is written with the exact digits of its Decimal value.

    Args:
        header: The header record to serialize
        options: Rendering options (defaults to compact, no HTML escaping)

    Returns:
        The JSON text to place in the X-Invoice header
    """
    if options is None:
        options = EncodeOptions()

    members: list[tuple[str, str]] = []
    for field in HEADER_FIELDS:
        value = getattr(header, field.attr)
        if value is None:
            continue
        members.append((field.wire, _format_value(field.kind, value, options.escape_html)))

    return _render(members, options.pretty)


# ============================================================================
# Decoding
# ============================================================================

def load_payload(value: Union[str, bytes]) -> dict[str, Any]:
    """
    Parse a header value into its JSON object.

    Numbers are read as Decimal, integers included, so amounts keep their
    exact digits and are never bounded by int conversion limits.

    Raises:
        MalformedHeaderError: If the value is not a JSON object
    """
    try:
        payload = json.loads(value, parse_float=Decimal, parse_int=Decimal)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedHeaderError(f"Header value is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedHeaderError(
            f"Header value must be a JSON object, got {type(payload).__name__}"
        )

    return payload


def header_from_payload(payload: dict[str, Any]) -> InvoiceHeader:
    """
    Build an InvoiceHeader from a parsed header object.

    Every rule runs before the record is built, and all violations are
    reported together. Keys outside the field table are dropped.

    Raises:
        HeaderValidationError: If the object violates the header schema
    """
    errors = validate_payload(payload)
    if errors:
        logger.debug(f"Rejected header value with {len(errors)} error(s)")
        raise HeaderValidationError(errors)

    header = InvoiceHeader.model_validate({
        field.wire: payload[field.wire]
        for field in HEADER_FIELDS
        if payload.get(field.wire) is not None
    })

    logger.debug(f"Decoded header for {header.filename} from {header.issuer}")
    return header


def decode_header(value: Union[str, bytes]) -> InvoiceHeader:
    """
    Deserialize an X-Invoice header value back into an InvoiceHeader.

    Args:
        value: The raw header value, as text or UTF-8 bytes

    Returns:
        The decoded header record

    Raises:
        MalformedHeaderError: If the value is not a JSON object
        HeaderValidationError: If the object violates the header schema
    """
    return header_from_payload(load_payload(value))
