"""Word-wrapping of help text to a console width."""

from __future__ import annotations

import re
import sys
from typing import TextIO

_WHITESPACE = " \t\v\r\n"
_WORD_SPLIT = re.compile(r"[ \t\v\r\n]+")
_LINE_BREAK = re.compile(r"\r\n?|\n")


def split_paragraph_into_words(line: str) -> list[str]:
    """Split a line on spaces, tabs, vertical tabs, CR and LF."""
    return [word for word in _WORD_SPLIT.split(line) if word]


def split_input_into_paragraphs(text: str) -> list[str]:
    """Split text into paragraphs at CR, LF or CRLF; a final break adds nothing."""
    if not text:
        return []
    pieces = _LINE_BREAK.split(text)
    if _LINE_BREAK.search(text[-2:]) and text[-1] in "\r\n":
        pieces.pop()
    return pieces


def format_paragraph(paragraph: str, width: int) -> list[str]:
    """Wrap one paragraph to ``width`` columns, keeping its leading indent.

    A word longer than the width is placed alone on its own line.
    """
    if width <= 0:
        return []
    indent = len(paragraph) - len(paragraph.lstrip(_WHITESPACE))
    indent = min(indent, width - 1)
    prefix = " " * indent
    words = split_paragraph_into_words(paragraph)

    lines: list[str] = []
    current = ""
    for word in words:
        if not current:
            current = prefix + word
        elif len(current) + 1 + len(word) <= width:
            current += " " + word
        else:
            lines.append(current)
            current = prefix + word
    if current or not words:
        lines.append(current)
    return lines


def format_pretty(text: str, width: int) -> list[str]:
    """Wrap every paragraph of ``text`` and return all output lines."""
    return [
        line
        for paragraph in split_input_into_paragraphs(text)
        for line in format_paragraph(paragraph, width)
    ]


def pretty_print(text: str, width: int, file: TextIO | None = None) -> None:
    """Write ``text`` wrapped to ``width`` columns to ``file`` (stdout by default)."""
    out = sys.stdout if file is None else file
    for line in format_pretty(text, width):
        out.write(line + "\n")