from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, TextIO
from xml.sax.saxutils import escape as xml_escape
from xml.sax.saxutils import quoteattr

from .errors import StructuralError

# characters XML 1.0 does not allow anywhere in a document
_ILLEGAL_XML_CHARS = re.compile("[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def _xml_safe(value: Any) -> str:
    text = str(value)
    match = _ILLEGAL_XML_CHARS.search(text)
    if match:
        raise StructuralError(f"Character {match.group()!r} cannot be written to XML (in {text!r}).")
    return text


class XmlWriter:
    """
    Incremental XML serializer.

    Every call writes straight to `out`, nothing is buffered beyond the
    currently open start tag (kept pending so empty elements end up as
    <tag/>). The open-element stack is explicit: closing with nothing open
    or writing after end_document() raises StructuralError. Balance is the
    caller's job.
    """

    def __init__(self, out: TextIO, *, indent: Optional[str] = "    ") -> None:
        self.out = out
        self.indent = indent
        self._stack: List[str] = []
        self._pending_start = False
        self._has_children: List[bool] = []
        self._started = False
        self._finished = False

    def _check_open(self) -> None:
        if self._finished:
            raise StructuralError("Cannot write to an XML document that was already finalized.")

    def _newline(self, depth: int) -> None:
        if self.indent is None:
            return
        if self._started or depth:
            self.out.write("\n")
        self.out.write(self.indent * depth)

    def _close_pending(self) -> None:
        if self._pending_start:
            self.out.write(">")
            self._pending_start = False

    def start_document(self, version: str = "1.0", encoding: str = "UTF-8") -> "XmlWriter":
        self._check_open()
        if self._started:
            raise StructuralError("The XML declaration must be the first thing written.")
        self.out.write(f'<?xml version="{version}" encoding="{encoding}"?>')
        self._started = True
        return self

    def start_element(self, name: str, attrib: Optional[Dict[str, Any]] = None) -> "XmlWriter":
        self._check_open()
        attrs = "".join(
            f" {key}={quoteattr(_xml_safe(value))}" for key, value in (attrib or {}).items() if value is not None
        )
        self._close_pending()
        if self._has_children:
            self._has_children[-1] = True
        self._newline(len(self._stack))
        self.out.write(f"<{name}{attrs}")
        self._stack.append(name)
        self._has_children.append(False)
        self._pending_start = True
        self._started = True
        return self

    def write_element(self, name: str, text: Any, attrib: Optional[Dict[str, Any]] = None) -> "XmlWriter":
        text = xml_escape(_xml_safe(text))
        self.start_element(name, attrib)
        self._close_pending()
        self.out.write(text)
        self._stack.pop()
        self._has_children.pop()
        self.out.write(f"</{name}>")
        return self

    def end_element(self) -> "XmlWriter":
        self._check_open()
        if not self._stack:
            raise StructuralError("No open XML element to close.")
        name = self._stack.pop()
        had_children = self._has_children.pop()
        if self._pending_start:
            self.out.write("/>")
            self._pending_start = False
            return self
        if had_children:
            self._newline(len(self._stack))
        self.out.write(f"</{name}>")
        return self

    def end_document(self) -> "XmlWriter":
        self._check_open()
        while self._stack:
            self.end_element()
        if self.indent is not None:
            self.out.write("\n")
        self._finished = True
        return self
