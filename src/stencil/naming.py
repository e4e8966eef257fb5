"""Project name checks used before a name becomes a directory."""

from __future__ import annotations

import re
import unicodedata

__all__ = ["slugify", "is_safe_path_segment", "project_name_problem"]


_SAFE_SEGMENT = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]*")
_SEPARATORS = re.compile(r"[\s\-]+")
_RESERVED_SEGMENTS = frozenset({".", ".."})

ALLOWED_CHARACTERS = "letters, digits, '.', '_' and '-'"


def slugify(value: str, *, separator: str = "-") -> str:
    """Create a filesystem friendly slug from ``value``.

    Unicode is folded to ASCII, punctuation is dropped and runs of whitespace
    or dashes collapse into a single ``separator``.
    """

    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^\w\- ]", "", text)
    text = text.strip().lower()

    if not text:
        return ""

    collapsed = _SEPARATORS.sub(separator, text)
    collapsed = re.sub(rf"{re.escape(separator)}+", separator, collapsed)
    return collapsed.strip(separator)


def is_safe_path_segment(name: str) -> bool:
    """Return ``True`` when ``name`` can only ever name a direct child directory."""

    if name in _RESERVED_SEGMENTS:
        return False
    return _SAFE_SEGMENT.fullmatch(name) is not None


def project_name_problem(name: str) -> str | None:
    """Describe what is wrong with ``name`` or return ``None`` when it is usable."""

    candidate = name.strip()
    if not candidate:
        return "Project name is required"
    if is_safe_path_segment(candidate):
        return None

    message = f"Project name may only contain {ALLOWED_CHARACTERS} and must start with a letter or digit"
    suggestion = slugify(candidate)
    if suggestion and is_safe_path_segment(suggestion):
        message += f" (try '{suggestion}')"
    return message
