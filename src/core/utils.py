import re
import unicodedata


def lower_lay_string(s: str) -> str:
    """
    Folds accents away and lowercases, so "Beyoncé" and "beyonce" compare equal.
    """
    normalized = unicodedata.normalize('NFKD', s or "")
    return ''.join(c for c in normalized if not unicodedata.combining(c)).casefold()


def collapse(s: str) -> str:
    """
    Collapses runs of whitespace into a single space and trims both ends.
    """
    return re.sub(r'\s+', ' ', s).strip()


def collation_key(s: str) -> tuple[str, str]:
    # Primary: accent/case folded text; secondary: the raw string so ordering stays total.
    return collapse(lower_lay_string(s)), s or ""


def normalize_query(query: str | None) -> str:
    return (query or "").strip().casefold()
