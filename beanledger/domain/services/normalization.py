"""Domain normalization helpers."""


def normalize_currency_code(code: str | None) -> str | None:
    """Normalize currency code values.

    Args:
        code: Raw currency code from callers or storage.

    Returns:
        str | None: Upper-cased code, or None when blank.
    """
    if not code:
        return None
    cleaned = code.strip()
    return cleaned.upper() if cleaned else None


def normalize_name(name: str | None) -> str:
    """Collapse surrounding whitespace in a display name."""
    if not name:
        return ""
    return name.strip()


__all__ = ["normalize_currency_code", "normalize_name"]
