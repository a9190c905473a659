"""Pure functions for deriving clean, normalized filenames.

This module contains no filesystem access — only string transformations.

The sanitization pipeline:
  1. Normalize Unicode (compatibility decomposition, combining marks dropped)
  2. Substitute separators (``use_underscore`` / ``remove_underscore`` / ``separator``)
  3. Swap ``old_separator`` for ``new_separator``
  4. Trim surrounding whitespace
  5. Replace characters outside the allowed set
  6. Title-case each separator-delimited word (optional)
  7. Prefix the modification timestamp (optional, idempotent)
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from datetime import datetime

# Format of the timestamp prefix, e.g. ``20240115_093000``.
TIMESTAMP_FORMAT: str = "%Y%m%d_%H%M%S"

# Everything that is NOT visible ASCII, Latin-1 supplement, a letter, a
# number, underscore, dot or hyphen.  ``\w`` covers letters, numbers and ``_``.
_INVALID_CHARS_RE: re.Pattern[str] = re.compile(r"[^ -~\xa0-\xff\w.-]")

# An existing ``YYYYMMDD_HHMMSS_`` prefix.
_TIMESTAMP_PREFIX_RE: re.Pattern[str] = re.compile(r"^[0-9]{8}_[0-9]{6}_")


@dataclass(frozen=True)
class SanitizeConfig:
    """Options controlling :func:`sanitize_name`.

    ``use_underscore`` and ``remove_underscore`` are mutually exclusive; callers
    must reject that combination (see :attr:`has_conflict`) before sanitizing.
    """

    separator: str = ""
    use_underscore: bool = False
    remove_underscore: bool = False
    old_separator: str = ""
    new_separator: str = ""
    title_case: bool = False
    include_timestamp: bool = False

    @property
    def has_conflict(self) -> bool:
        """Return ``True`` if both underscore options are enabled."""
        return self.use_underscore and self.remove_underscore


DEFAULT_CONFIG: SanitizeConfig = SanitizeConfig()


def normalize_unicode(text: str) -> str:
    """Decompose *text* and drop nonspacing marks.

    ``"café"`` becomes ``"cafe"``; fullwidth and mathematical alphanumerics
    fold to their plain letters.  Characters without a decomposition pass
    through unchanged.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")


def replace_separators(name: str, config: SanitizeConfig) -> str:
    """Apply the separator substitution and the old/new separator swap."""
    if config.use_underscore:
        name = name.replace(" ", "_")
    elif config.remove_underscore:
        name = name.replace("_", " ")
    elif config.separator:
        name = name.replace(" ", config.separator)

    if config.old_separator and config.new_separator:
        name = name.replace(config.old_separator, config.new_separator)

    return name


def remove_invalid_chars(name: str, replacement: str = "") -> str:
    """Replace every character outside the allowed set with *replacement*."""
    return _INVALID_CHARS_RE.sub(lambda _: replacement, name)


def to_title_case(name: str, separator: str = "") -> str:
    """Capitalize each *separator*-delimited word, lowercasing the rest.

    An empty *separator* splits on single spaces.  Empty words (from
    consecutive separators) are kept as-is so the separators survive.
    """
    sep = separator or " "
    words = name.split(sep)
    return sep.join(word[:1].upper() + word[1:].lower() for word in words)


def split_extension(name: str) -> tuple[str, str]:
    """Split *name* into ``(stem, extension)`` at the last dot.

    The extension keeps its leading dot; it is empty if there is no dot.
    """
    dot_idx = name.rfind(".")
    if dot_idx == -1:
        return name, ""
    return name[:dot_idx], name[dot_idx:]


def has_timestamp_prefix(name: str) -> bool:
    """Return ``True`` if the stem of *name* already starts with a timestamp."""
    stem, _ = split_extension(name)
    return _TIMESTAMP_PREFIX_RE.match(stem) is not None


def add_timestamp_prefix(name: str, timestamp: str) -> str:
    """Prefix ``timestamp_`` to the stem of *name* unless one is already there."""
    if has_timestamp_prefix(name):
        return name
    stem, ext = split_extension(name)
    return f"{timestamp}_{stem}{ext}"


def format_timestamp(mtime: float) -> str:
    """Format a POSIX modification time as local ``YYYYMMDD_HHMMSS``."""
    return datetime.fromtimestamp(mtime).strftime(TIMESTAMP_FORMAT)


def sanitize_name(
    name: str,
    timestamp: str = "",
    config: SanitizeConfig = DEFAULT_CONFIG,
) -> str:
    """Run the full sanitization pipeline on a single filename.

    *timestamp* is only used when ``config.include_timestamp`` is set.  The
    result may be empty; deciding what to do with that is up to the caller.
    """
    name = normalize_unicode(name)
    name = replace_separators(name, config)
    name = name.strip()
    name = remove_invalid_chars(name, config.separator)

    if config.title_case:
        name = to_title_case(name, config.separator)

    if config.include_timestamp:
        name = add_timestamp_prefix(name, timestamp)

    return name


def is_name_clean(
    name: str,
    timestamp: str = "",
    config: SanitizeConfig = DEFAULT_CONFIG,
) -> bool:
    """Return ``True`` if *name* requires no sanitization."""
    return sanitize_name(name, timestamp, config) == name
