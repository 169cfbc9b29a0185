import re

# Simple, pragmatic pattern: local@domain.tld
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def clean_str(val) -> str | None:
    """Trim a string value. Returns None for non-strings and blank strings."""
    if not isinstance(val, str):
        return None
    s = val.strip()
    return s or None


def normalize_email(val) -> str | None:
    s = clean_str(val)
    return s.lower() if s else None


def is_valid_email(val: str | None) -> bool:
    if not val:
        return False
    return bool(_EMAIL_RE.match(val))
