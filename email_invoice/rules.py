"""
Field table and validation rules for the X-Invoice header.

The field table maps every InvoiceHeader attribute to its wire name, its
JSON kind and whether it is required. Encoding, decoding and the rules
below are all driven from it.

Rules are organized by category:
- Completeness rules: required keys must be present and non-null
- Type rules: values must have the expected JSON type
- Format rules: values of the right type must also be readable
- Version rules: the schema version must be one this package knows

Each rule returns an error code if validation fails, or None if it passes.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Final, Optional

from pydantic import TypeAdapter, ValidationError

from .config import SUPPORTED_VERSIONS, ErrorCategory


class FieldKind(str, Enum):
    """JSON representation of a header field."""
    STRING = "string"
    BOOLEAN = "boolean"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class HeaderField:
    """
    One entry of the field table.

    Attributes:
        attr: Attribute name on InvoiceHeader
        wire: Key used in the encoded JSON object
        kind: JSON representation of the value
        required: Whether a well-formed header must carry the key
    """
    attr: str
    wire: str
    kind: FieldKind
    required: bool = False


# Wire order of the encoded object
HEADER_FIELDS: Final[tuple[HeaderField, ...]] = (
    HeaderField("version", "version", FieldKind.STRING, required=True),
    HeaderField("issuer", "issuer", FieldKind.STRING, required=True),
    HeaderField("filename", "filename", FieldKind.STRING, required=True),
    HeaderField("invoice_id", "invoice_id", FieldKind.STRING),
    HeaderField("invoice_date", "invoice_date", FieldKind.TIMESTAMP, required=True),
    HeaderField("due_date", "due_date", FieldKind.TIMESTAMP),
    HeaderField("paid", "paid", FieldKind.BOOLEAN, required=True),
    HeaderField("paid_date", "paid_date", FieldKind.TIMESTAMP),
    HeaderField("amount", "amount", FieldKind.DECIMAL, required=True),
    HeaderField("currency", "currency", FieldKind.STRING, required=True),
    HeaderField("pay_url", "payUrl", FieldKind.STRING),
)

WIRE_NAMES: Final[frozenset[str]] = frozenset(f.wire for f in HEADER_FIELDS)


# ISO 8601 date-time: calendar date, time of day, optional fraction and offset
_ISO_DATETIME: Final[re.Pattern] = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}(:\d{2}([.,]\d+)?)?([Zz]|[+-]\d{2}(:?\d{2})?)?"
)

# Same parser InvoiceHeader uses, so a timestamp accepted here also
# builds a record
_TIMESTAMP_ADAPTER: Final[TypeAdapter] = TypeAdapter(datetime)

# The check takes a field table entry and the decoded JSON object
RuleCheckFn = Callable[[HeaderField, dict[str, Any]], Optional[str]]


@dataclass
class ValidationRule:
    """
    Represents a single validation rule bound to one header field.

    Attributes:
        code: Machine-readable error code (e.g., "missing_field:issuer")
        description: Human-readable description of the rule
        category: Category of the rule
        field: Field table entry the rule inspects
        check: Function that performs the validation check
    """
    code: str
    description: str
    category: ErrorCategory
    field: HeaderField
    check: RuleCheckFn


# ============================================================================
# Completeness Rules
# ============================================================================

def check_present(field: HeaderField, payload: dict[str, Any]) -> Optional[str]:
    """A required key must be present and must not be null."""
    if payload.get(field.wire) is None:
        return f"{ErrorCategory.MISSING_FIELD.value}:{field.wire}"
    return None


# ============================================================================
# Type Rules
# ============================================================================

# JSON type each kind is written as
_JSON_TYPES: Final[dict[FieldKind, str]] = {
    FieldKind.STRING: "string",
    FieldKind.BOOLEAN: "boolean",
    FieldKind.DECIMAL: "number",
    FieldKind.TIMESTAMP: "string",
}


def _has_json_type(kind: FieldKind, value: Any) -> bool:
    if kind is FieldKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is FieldKind.DECIMAL:
        # bool is an int subclass, but JSON true/false are not numbers
        return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
    return isinstance(value, str)


def check_json_type(field: HeaderField, payload: dict[str, Any]) -> Optional[str]:
    """
    A present value must have the JSON type of its field.

    No coercion is attempted: "39.90" is not an amount and 1 is not a
    payment flag.
    """
    value = payload.get(field.wire)
    if value is None:
        return None

    if not _has_json_type(field.kind, value):
        return f"{ErrorCategory.TYPE_ERROR.value}:{field.wire}"

    return None


# ============================================================================
# Format Rules
# ============================================================================

def check_timestamp_format(field: HeaderField, payload: dict[str, Any]) -> Optional[str]:
    """
    Timestamp strings must be ISO 8601 date-times.

    Epoch seconds and bare dates are rejected even though the model
    parser would read them: they carry no offset.
    """
    value = payload.get(field.wire)
    if not isinstance(value, str):
        return None

    if not _ISO_DATETIME.fullmatch(value):
        return f"{ErrorCategory.FORMAT_ERROR.value}:{field.wire}"

    try:
        _TIMESTAMP_ADAPTER.validate_python(value)
    except ValidationError:
        return f"{ErrorCategory.FORMAT_ERROR.value}:{field.wire}"

    return None


def check_finite_amount(field: HeaderField, payload: dict[str, Any]) -> Optional[str]:
    """Amounts must be finite; NaN and Infinity have no JSON number form."""
    value = payload.get(field.wire)
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float, Decimal)) and not Decimal(value).is_finite():
        return f"{ErrorCategory.FORMAT_ERROR.value}:{field.wire}"

    return None


# ============================================================================
# Version Rules
# ============================================================================

def check_supported_version(field: HeaderField, payload: dict[str, Any]) -> Optional[str]:
    """The version tag must be one of SUPPORTED_VERSIONS."""
    value = payload.get(field.wire)
    if isinstance(value, str) and value not in SUPPORTED_VERSIONS:
        return f"{ErrorCategory.UNSUPPORTED_VERSION.value}:{field.wire}"
    return None


# ============================================================================
# Rule Registry
# ============================================================================

def _rules_for(field: HeaderField) -> list[ValidationRule]:
    rules: list[ValidationRule] = []

    if field.required:
        rules.append(ValidationRule(
            code=f"{ErrorCategory.MISSING_FIELD.value}:{field.wire}",
            description=f"'{field.wire}' must be present and not null",
            category=ErrorCategory.MISSING_FIELD,
            field=field,
            check=check_present,
        ))

    rules.append(ValidationRule(
        code=f"{ErrorCategory.TYPE_ERROR.value}:{field.wire}",
        description=f"'{field.wire}' must be a JSON {_JSON_TYPES[field.kind]}",
        category=ErrorCategory.TYPE_ERROR,
        field=field,
        check=check_json_type,
    ))

    if field.kind is FieldKind.TIMESTAMP:
        rules.append(ValidationRule(
            code=f"{ErrorCategory.FORMAT_ERROR.value}:{field.wire}",
            description=f"'{field.wire}' must be an ISO 8601 timestamp",
            category=ErrorCategory.FORMAT_ERROR,
            field=field,
            check=check_timestamp_format,
        ))
    elif field.kind is FieldKind.DECIMAL:
        rules.append(ValidationRule(
            code=f"{ErrorCategory.FORMAT_ERROR.value}:{field.wire}",
            description=f"'{field.wire}' must be a finite number",
            category=ErrorCategory.FORMAT_ERROR,
            field=field,
            check=check_finite_amount,
        ))

    if field.wire == "version":
        rules.append(ValidationRule(
            code=f"{ErrorCategory.UNSUPPORTED_VERSION.value}:{field.wire}",
            description="Schema version must be supported",
            category=ErrorCategory.UNSUPPORTED_VERSION,
            field=field,
            check=check_supported_version,
        ))

    return rules


# All validation rules in execution order: field table order, and for each
# field completeness, then type, then format or version
VALIDATION_RULES: list[ValidationRule] = [
    rule for header_field in HEADER_FIELDS for rule in _rules_for(header_field)
]


def get_rules_by_category(category: ErrorCategory) -> list[ValidationRule]:
    """Get all rules belonging to a specific category."""
    return [rule for rule in VALIDATION_RULES if rule.category == category]


def get_rule_descriptions() -> dict[str, str]:
    """Get a mapping of rule codes to their descriptions."""
    return {rule.code: rule.description for rule in VALIDATION_RULES}
