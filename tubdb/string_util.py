"""Small string helpers used across the database."""

from __future__ import annotations

_WHITESPACE = " \t\n\r\f\v"
_BOLD_ON = "\033[0;1m"
_BOLD_OFF = "\033[0;0m"

_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def contains(haystack: str, needle: str) -> bool:
    """Return True if ``needle`` occurs in ``haystack``."""
    return needle in haystack


def rtrim(text: str) -> str:
    """Remove trailing whitespace (space, \\t, \\n, \\r, \\f, \\v)."""
    return text.rstrip(_WHITESPACE)


def indent(num_indent: int) -> str:
    """Return a string of ``num_indent`` spaces."""
    return " " * max(num_indent, 0)


def starts_with(text: str, prefix: str) -> bool:
    """Return True if ``text`` begins with ``prefix``."""
    return text.startswith(prefix)


def ends_with(text: str, suffix: str) -> bool:
    """Return True if ``text`` ends with ``suffix``."""
    return text.endswith(suffix)


def repeat(text: str, n: int) -> str:
    """Return ``text`` repeated ``n`` times."""
    if n <= 0 or not text:
        return ""
    return text * n


def split_on_char(text: str, delimiter: str) -> list[str]:
    """Split on a single character, keeping inner empty fields but not a trailing one."""
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    parts = text.split(delimiter)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


def split(text: str, separator: str) -> list[str]:
    """Split on a separator string, dropping empty pieces."""
    if not separator:
        raise ValueError("separator must not be empty")
    return [part for part in text.split(separator) if part]


def join(parts: list[str], separator: str) -> str:
    """Join ``parts`` with ``separator`` between them."""
    return separator.join(parts)


def prefix_lines(text: str, prefix: str) -> str:
    """Put ``prefix`` in front of every line of ``text``."""
    return "\n".join(prefix + line for line in split_on_char(text, "\n"))


def format_size(num_bytes: int) -> str:
    """Render a byte count in bytes, KB, MB or GB."""
    kb = 1024.0
    mb = kb * 1024
    gb = mb * 1024
    if num_bytes >= gb:
        return f"{num_bytes / gb:.2f} GB"
    if num_bytes >= mb:
        return f"{num_bytes / mb:.2f} MB"
    if num_bytes >= kb:
        return f"{num_bytes / kb:.2f} KB"
    return f"{num_bytes} bytes"


def bold(text: str) -> str:
    """Wrap ``text`` in terminal escape codes for bold output."""
    return f"{_BOLD_ON}{text}{_BOLD_OFF}"


def upper(text: str) -> str:
    """Upper-case ASCII letters, leaving other characters alone."""
    return text.translate(_ASCII_UPPER)


def lower(text: str) -> str:
    """Lower-case ASCII letters, leaving other characters alone."""
    return text.translate(_ASCII_LOWER)


def strip(text: str, char: str) -> str:
    """Remove every occurrence of ``char`` from ``text``."""
    return text.replace(char, "")