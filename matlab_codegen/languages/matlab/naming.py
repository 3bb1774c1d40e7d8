"""
MATLAB-specific naming utilities and sanitization.

Handles MATLAB keywords, class-definition block words and the
escaping rules of single-quoted character literals.
"""

import re
from typing import Optional

from ...core.naming import NameRole, NameSanitizer, RolePolicy, TruncationRegistry


# Output of iskeyword in MATLAB (R2023a)
MATLAB_RESERVED_WORDS = {
    "break",
    "case",
    "catch",
    "classdef",
    "continue",
    "else",
    "elseif",
    "end",
    "for",
    "function",
    "global",
    "if",
    "otherwise",
    "parfor",
    "persistent",
    "return",
    "spmd",
    "switch",
    "try",
    "while",
}

# Legal identifiers that cannot name a class property
MATLAB_RESERVED_PROPERTY_WORDS = frozenset(
    {
        "properties",
        "methods",
        "events",
        "enumerators",
    }
)

# Operators found in OpenAPI property names
MATLAB_SYMBOL_WORDS = {
    "!": "not",
    "=": "eq",
    ">": "gt",
    "<": "lt",
    "~": "tilde",
}

MATLAB_ROLE_POLICIES = {
    NameRole.MODEL: RolePolicy(
        marker="model", recase=True, placeholder="Model", warn=True
    ),
    NameRole.OPERATION: RolePolicy(
        marker="call", recase=True, lower_first=True, placeholder="call", warn=True
    ),
    NameRole.TAG: RolePolicy(marker="api", recase=True, placeholder="Api", warn=True),
    NameRole.FIELD: RolePolicy(
        map_symbols=True, extra_reserved=MATLAB_RESERVED_PROPERTY_WORDS
    ),
    NameRole.PARAMETER: RolePolicy(map_symbols=True),
}


def create_matlab_sanitizer(
    registry: Optional[TruncationRegistry] = None,
) -> NameSanitizer:
    """Create a name sanitizer configured for MATLAB."""
    return NameSanitizer(
        MATLAB_RESERVED_WORDS,
        MATLAB_ROLE_POLICIES,
        symbol_words=MATLAB_SYMBOL_WORDS,
        registry=registry,
    )


def escape_quotation_mark(text: str) -> str:
    """Remove double quotes to avoid code injection."""
    return text.replace('"', "")


def escape_unsafe_characters(text: str) -> str:
    """Double single quotes for use inside a character literal."""
    return text.replace("'", "''")


def escape_text(text: str) -> str:
    """Flatten control whitespace and escape a value for a quoted literal."""
    return escape_unsafe_characters(re.sub(r"[\t\n\r]", " ", text))


def validate_matlab_package_name(name: str) -> list[str]:
    """
    Validate a dotted MATLAB package name.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    for part in name.split("."):
        if not re.fullmatch(r"[A-Za-z][A-Za-z0-9_]*", part):
            errors.append(f"'{part}' is not a valid MATLAB identifier")
        elif part.lower() in MATLAB_RESERVED_WORDS:
            errors.append(f"'{part}' is a MATLAB reserved word")
        elif len(part) > 63:
            errors.append(f"'{part}' is longer than 63 characters")

    return errors
