"""
Line parser for the interactive storacalc shell.

Accepted lines (case-insensitive):
    <format> <width> <height>     e.g. "jpg 1024 768", "JP2 640 480", "bmp 100 100"
    g <id> [<id> ...]             e.g. "g 1 2 3" or "G 1, 2, 3"
    q                             exit

Parsing never raises; lines that cannot be used become InvalidRequest.
"""

import re
from dataclasses import dataclass, field
from typing import List, Union

from formats import is_known_format, resolve_format

GROUP = "g"
EXIT = "q"

# Largest accepted edge (32-bit unsigned)
MAX_DIMENSION = 2 ** 32 - 1

_SEPARATORS = re.compile(r"[\s,]+")


@dataclass
class CreateRequest:
    format_name: str
    width: int
    height: int


@dataclass
class GroupRequest:
    ids: List[int] = field(default_factory=list)


@dataclass
class ExitRequest:
    pass


@dataclass
class EmptyRequest:
    pass


@dataclass
class InvalidRequest:
    line: str
    reason: str


ParsedLine = Union[CreateRequest, GroupRequest, ExitRequest, EmptyRequest, InvalidRequest]


def _to_int(token: str):
    """Plain unsigned decimal only; signs, underscores and non-ASCII digits are rejected."""
    if token.isascii() and token.isdigit():
        return int(token)
    return None


def parse_group_ids(tokens: List[str]) -> List[int]:
    """Read integer ids until the first token that is not an integer."""
    ids = []
    for token in tokens:
        value = _to_int(token)
        if value is None:
            break
        ids.append(value)
    return ids


def parse_line(line: str) -> ParsedLine:
    """
    Turn one input line into a request.

    Args:
        line: Raw line as typed by the user

    Returns:
        One of CreateRequest, GroupRequest, ExitRequest, EmptyRequest, InvalidRequest
    """
    tokens = [t for t in _SEPARATORS.split(line.strip().lower()) if t]
    if not tokens:
        return EmptyRequest()

    command, args = tokens[0], tokens[1:]

    if command == EXIT:
        return ExitRequest()

    if command == GROUP:
        return GroupRequest(ids=parse_group_ids(args))

    if not is_known_format(command):
        return InvalidRequest(line=line, reason=f"unknown format '{command}'")

    if len(args) < 2:
        return InvalidRequest(line=line, reason="expected <width> <height>")

    width, height = _to_int(args[0]), _to_int(args[1])
    if width is None or height is None:
        return InvalidRequest(line=line, reason="width and height must be non-negative integers")
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        return InvalidRequest(line=line, reason=f"width and height must not exceed {MAX_DIMENSION}")

    return CreateRequest(format_name=resolve_format(command), width=width, height=height)
