def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()

def blank_to_none(value):
    """
    Treat an empty or whitespace-only string as "not provided".
    Any other value (including non-strings) is returned unchanged.
    """
    if isinstance(value, str) and not value.strip():
        return None
    return value
