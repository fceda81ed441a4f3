"""ID Generation.

Prefixed ULIDs for editor elements and build attempts.

- K-sortable: creation order survives in the id itself
- Prefixed: `elem_*` and `build_*` keep logs and project files readable
- Never reused: every call draws a fresh ULID
"""

from typing import NewType
from ulid import ULID

ElementID = NewType("ElementID", str)
"""Editor element identifier"""

BuildID = NewType("BuildID", str)
"""Build attempt identifier"""


class Prefix:
    """ID prefix constants."""

    ELEMENT = "elem"
    BUILD = "build"


def generate_raw() -> str:
    """Generate ULID without prefix."""
    return str(ULID())


def generate_prefixed(prefix: str) -> str:
    """Generate ULID with type prefix."""
    return f"{prefix}_{generate_raw()}"


def new_element_id() -> ElementID:
    """Generate new element ID."""
    return ElementID(generate_prefixed(Prefix.ELEMENT))


def new_build_id() -> BuildID:
    """Generate new build ID."""
    return BuildID(generate_prefixed(Prefix.BUILD))


def is_valid(id_str: str) -> bool:
    """Check if string is a valid (optionally prefixed) ULID."""
    ulid_part = id_str.split("_", 1)[1] if "_" in id_str else id_str
    if len(ulid_part) != 26:
        return False
    try:
        ULID.from_str(ulid_part)
        return True
    except ValueError:
        return False


def extract_prefix(id_str: str) -> str | None:
    """Extract prefix from prefixed ID, or None when unprefixed."""
    parts = id_str.split("_")
    return parts[0] if len(parts) == 2 else None
