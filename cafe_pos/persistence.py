"""Whole-file helpers for the line-oriented data files."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable

from cafe_pos.constant import CURRENCY

logger = logging.getLogger(__name__)

# U+FFFD, what a failed UTF-8 decode leaves behind.
UNREADABLE_MARK = "\ufffd"


def _prepare(path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def is_missing_or_empty(path: Path) -> bool:
    """True when a store must be seeded with its defaults."""
    path = Path(path)
    return not path.is_file() or path.stat().st_size == 0


def read_lines(path: Path) -> list[str]:
    """
    Read every line without line endings; a missing file reads as no lines.

    Lines are decoded one at a time. A line that is not valid UTF-8 comes back
    with replacement characters so that ``is_unreadable`` flags it and the
    record parsers reject it, instead of the whole file failing to load.
    """
    path = Path(path)
    if not path.is_file():
        return []

    lines: list[str] = []
    for number, raw in enumerate(path.read_bytes().splitlines(), start=1):
        try:
            lines.append(raw.decode("utf-8"))
        except UnicodeDecodeError:
            logger.warning("undecodable_line path=%s line=%d", path, number)
            lines.append(raw.decode("utf-8", errors="replace"))
    return lines


def is_unreadable(line: str) -> bool:
    return UNREADABLE_MARK in line


def write_lines(path: Path, lines: Iterable[str]) -> None:
    """Overwrite the file with one record per line."""
    body = "".join(f"{line}\n" for line in lines)
    _prepare(path).write_text(body, encoding="utf-8")


def append_line(path: Path, line: str) -> None:
    append_text(path, f"{line}\n")


def append_text(path: Path, text: str) -> None:
    with _prepare(path).open("a", encoding="utf-8") as fh:
        fh.write(text)


def ensure_file(path: Path) -> None:
    path = _prepare(path)
    if not path.exists():
        path.write_text("", encoding="utf-8")


def read_money_after(line: str, glyph: str = CURRENCY) -> Decimal | None:
    """Read the numeric run that follows the currency glyph, ignoring thousands separators."""
    idx = line.find(glyph)
    if idx < 0:
        return None

    digits: list[str] = []
    for ch in line[idx + len(glyph) :].lstrip():
        if not (ch.isdigit() or ch in ".,"):
            break
        digits.append(ch)

    cleaned = "".join(digits).replace(",", "").rstrip(".")
    if not cleaned:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None
