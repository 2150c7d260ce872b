"""Small predicates over request and upload strings."""


def is_empty_or_whitespace_only(string: str | None) -> bool:
    """Return True if the string is None, empty, or all whitespace."""
    return string is None or string.strip() == ""


def is_boolean_string(string: str | None) -> bool:
    """Return True only for the exact values "true" and "false".

    Stricter than truthiness parsing: "True", "1" and "yes" are rejected.
    """
    return string in ("true", "false")
