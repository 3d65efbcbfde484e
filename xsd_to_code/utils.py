"""
Utility functions for the XSD to code generator.
"""

import re

# Anything that cannot appear in an identifier
_NON_IDENTIFIER_PATTERN = re.compile(r"[^0-9A-Za-z_]")


def sanitize_identifier(text: str) -> str:
    """Turn arbitrary schema text into an identifier.

    Examples:
        "first-name" -> "first_name"
        "2D" -> "_2D"
        "a b.c" -> "a_b_c"
        "" -> "_"

    Args:
        text: Name or literal taken from a schema

    Returns:
        A string made only of letters, digits and underscores, never
        starting with a digit
    """
    identifier = _NON_IDENTIFIER_PATTERN.sub("_", text)
    if not identifier:
        return "_"
    if identifier[0].isdigit():
        return f"_{identifier}"
    return identifier


def unique_name(name: str, used: set[str]) -> str:
    """Return name, or name with the smallest numeric suffix not in used, and mark it used."""
    candidate = name
    index = 1
    while candidate in used:
        candidate = f"{name}{index}"
        index += 1
    used.add(candidate)
    return candidate
