"""
Validation engine for decoded X-Invoice header payloads.

This module runs the rules against a decoded JSON object and collects
every violation, so a caller sees all problems with a header at once
instead of only the first one.
"""

from typing import Any, Optional

from .config import logger
from .rules import VALIDATION_RULES, WIRE_NAMES, ValidationRule, get_rule_descriptions


def validate_payload(
    payload: dict[str, Any],
    rules: Optional[list[ValidationRule]] = None
) -> list[str]:
    """
    Validate a decoded header object against all defined rules.

    Rules run in registry order. Once a rule fails for a field, the
    remaining rules for that field are skipped, so each field reports at
    most one error.

    Args:
        payload: The decoded JSON object
        rules: Optional list of rules to apply (defaults to all VALIDATION_RULES)

    Returns:
        List of error codes, empty when the payload is well formed
    """
    if rules is None:
        rules = VALIDATION_RULES

    errors: list[str] = []
    failed: set[str] = set()

    for rule in rules:
        if rule.field.wire in failed:
            continue

        error_code = rule.check(rule.field, payload)
        if error_code:
            errors.append(error_code)
            failed.add(rule.field.wire)

    unknown = sorted(set(payload) - WIRE_NAMES)
    if unknown:
        logger.debug(f"Ignoring unknown header keys: {', '.join(unknown)}")

    return errors


def format_errors_text(errors: list[str]) -> str:
    """
    Format a list of error codes as human-readable text for CLI output.

    Args:
        errors: Error codes as returned by validate_payload

    Returns:
        Formatted string for display, one error per line
    """
    descriptions = get_rule_descriptions()
    lines = [f"Header has {len(errors)} error(s):"]
    for code in errors:
        description = descriptions.get(code)
        if description:
            lines.append(f"  - {code}: {description}")
        else:
            lines.append(f"  - {code}")
    return "\n".join(lines)
