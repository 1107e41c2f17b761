"""
Rotation specifications of map sections.

A map can be rendered from four viewing angles in 90 degree steps. They are
written either by name (``top-left``) or in degrees (``90``, ``0-180``).
"""

import re
from typing import FrozenSet, List, Optional, Set, Tuple

# Index = rotation step, clockwise from the default view
ROTATION_NAMES = ("top-left", "top-right", "bottom-right", "bottom-left")

ROTATION_STEP = 90

_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")
# ASCII digits only, at most four of them
_DEGREES_RE = re.compile(r"^[0-9]{1,4}$")
_RANGE_RE = re.compile(r"^([0-9]{1,4})-([0-9]{1,4})$")


def rotation_name(index: int) -> str:
    """Get the display name of a rotation index."""
    return ROTATION_NAMES[index]


def _degrees_to_index(degrees: int) -> Optional[int]:
    if degrees % ROTATION_STEP != 0:
        return None
    index = degrees // ROTATION_STEP
    return index if 0 <= index < len(ROTATION_NAMES) else None


def _parse_token(token: str) -> Optional[List[int]]:
    name = token.lower()
    if name in ROTATION_NAMES:
        return [ROTATION_NAMES.index(name)]

    if _DEGREES_RE.match(token):
        index = _degrees_to_index(int(token))
        return None if index is None else [index]

    match = _RANGE_RE.match(token)
    if match:
        start = _degrees_to_index(int(match.group(1)))
        end = _degrees_to_index(int(match.group(2)))
        if start is None or end is None or start > end:
            return None
        return list(range(start, end + 1))

    return None


def parse_rotations(text: str) -> Tuple[FrozenSet[int], List[str]]:
    """Parse a rotation specification into a set of rotation indices.

    Tokens are separated by commas and/or whitespace. Invalid tokens do not
    abort parsing: the valid part is returned together with one error text
    per rejected token.

    Args:
        text: Specification such as ``"top-left, bottom-right"`` or ``"0-180"``

    Returns:
        Tuple of (rotation indices, error texts)
    """
    rotations: Set[int] = set()
    errors: List[str] = []
    allowed = ", ".join(ROTATION_NAMES)
    degrees = ", ".join(str(i * ROTATION_STEP) for i in range(len(ROTATION_NAMES)))

    for token in _TOKEN_SPLIT_RE.split(text.strip()):
        if not token:
            continue
        indices = _parse_token(token)
        if indices is None:
            errors.append(
                f"Invalid rotation '{token}' (use {allowed} or {degrees} degrees)"
            )
            continue
        rotations.update(indices)

    return frozenset(rotations), errors
