"""
Rendering of validation results for the user.
"""

from typing import Any, Dict, List

import orjson

from .config.types import ValidationMap, has_errors


def format_validation(validation: ValidationMap) -> List[str]:
    """Format a validation map as text lines.

    Sections without messages are skipped.

    Returns:
        One header line per section followed by its indented messages
    """
    lines: List[str] = []
    for section, messages in validation.items():
        if not len(messages):
            continue
        lines.append(f"[{section}]")
        lines.extend(f"  {message}" for message in messages)
    return lines


def validation_report(validation: ValidationMap) -> bytes:
    """Serialize a validation map as an indented JSON document."""
    sections: Dict[str, List[Dict[str, Any]]] = {
        section: [
            {"severity": message.severity.value, "message": message.message}
            for message in messages
        ]
        for section, messages in validation.items()
    }
    report = {"valid": not has_errors(validation), "sections": sections}
    return orjson.dumps(report, option=orjson.OPT_INDENT_2)
