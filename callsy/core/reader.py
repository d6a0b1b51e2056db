import json
import os
import re
from typing import Sequence

import pydantic

from callsy.exceptions import InputIOError, MalformedInputError
from callsy.schemas.request import RequestSpec

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_decoder = json.JSONDecoder()


def read_request_file(path: str | os.PathLike) -> str:
    """Read the whole input document as text."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputIOError(path, e) from e


def _skip(text: str, idx: int) -> int:
    return _WHITESPACE.match(text, idx).end()


def locate(text: str, loc: Sequence[str | int]) -> int:
    """Offset in `text` (valid JSON) of the member that `loc` points at.

    Points at the member's key; for a key that is missing, at the closing
    brace of the object that should hold it.
    """
    idx = _skip(text, 0)
    for depth, part in enumerate(loc):
        if not text.startswith("{", idx):
            return idx
        _, end = _decoder.raw_decode(text, idx)
        found = None
        pos = _skip(text, idx + 1)
        while text.startswith('"', pos):
            key, after_key = _decoder.raw_decode(text, pos)
            value_start = _skip(text, _skip(text, after_key) + 1)
            if key == part:
                found = (pos, value_start)  # json.loads keeps the last duplicate
            _, value_end = _decoder.raw_decode(text, value_start)
            pos = _skip(text, value_end)
            if text.startswith(",", pos):
                pos = _skip(text, pos + 1)
        if found is None:
            return end - 1
        if depth == len(loc) - 1:
            return found[0]
        idx = found[1]
    return idx


def _line_column(text: str, offset: int) -> tuple[int, int]:
    line = text.count("\n", 0, offset) + 1
    column = offset - text.rfind("\n", 0, offset)
    return line, column


def decode_request(text: str) -> RequestSpec:
    """Decode the input document into a `RequestSpec`.

    Syntax errors report where parsing stopped; schema errors report the
    position of the offending member and its dotted location.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(e.msg, line=e.lineno, column=e.colno) from e

    try:
        return RequestSpec.model_validate(data)
    except pydantic.ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "document"
        line, column = _line_column(text, locate(text, error["loc"]))
        raise MalformedInputError(
            f"{location}: {error['msg']}", line=line, column=column
        ) from e
