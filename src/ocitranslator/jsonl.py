from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional, TextIO

from .errors import InventoryParseError


@dataclass(frozen=True)
class FlatLine:
    data: Any
    line_no: int
    last: bool = False


def _parse(line: str, line_no: int, name: str) -> Any:
    try:
        return json.loads(line)
    except json.JSONDecodeError as e:
        raise InventoryParseError(f"Invalid JSONL at {name}:{line_no}: {e}", line=line_no) from e


def iter_jsonl_lines(stream: Iterable[str], *, name: Optional[str] = None) -> Iterator[FlatLine]:
    """
    Lazily parse one JSON value per non-blank line.

    The last parsed line comes out with last=True, so consumers can finish
    their output without peeking ahead themselves. One line is held back to
    make that possible. An invalid line raises InventoryParseError and
    stops the iteration.
    """
    name = name or getattr(stream, "name", "<stream>")
    previous: Optional[FlatLine] = None

    for line_no, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        current = FlatLine(data=_parse(line, line_no, name), line_no=line_no)
        if previous is not None:
            yield previous
        previous = current

    if previous is not None:
        yield FlatLine(data=previous.data, line_no=previous.line_no, last=True)


class JsonlWriter:
    """One compact JSON document per line."""

    def __init__(self, out: TextIO) -> None:
        self.out = out

    def write(self, obj: Any) -> None:
        self.out.write(json.dumps(obj, ensure_ascii=False, separators=(",", ":")) + "\n")
