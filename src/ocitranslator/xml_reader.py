from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional, Union

from lxml import etree

from .errors import InventoryParseError


@dataclass(frozen=True)
class HeaderClosed:
    attrib: Dict[str, str]
    children: Dict[str, str] = field(default_factory=dict)
    line: Optional[int] = None


@dataclass(frozen=True)
class RecordClosed:
    attrib: Dict[str, str]
    children: Dict[str, str] = field(default_factory=dict)
    line: Optional[int] = None


@dataclass(frozen=True)
class EndOfStream:
    pass


InventoryEvent = Union[HeaderClosed, RecordClosed, EndOfStream]

Source = Union[str, Path, BinaryIO]


def _localname(elem: etree._Element) -> str:
    return etree.QName(elem).localname


def _child_texts(elem: etree._Element) -> Dict[str, str]:
    # direct children only; <allocation>, <in-stock-date>, <description>...
    out: Dict[str, str] = {}
    for ch in elem:
        if not isinstance(ch.tag, str):
            continue
        out[_localname(ch)] = (ch.text or "").strip()
    return out


def _release(elem: etree._Element) -> None:
    elem.clear()
    while elem.getprevious() is not None:
        del elem.getparent()[0]


def iter_inventory_events(source: Source) -> Iterator[InventoryEvent]:
    """
    Streaming reader for SFCC inventory-list XML.

    Yields HeaderClosed when a </header> closes and RecordClosed when a
    </record> closes, in document order, then a single EndOfStream.
    Each element is released once its event is yielded so memory stays flat
    regardless of the file size. Malformed XML raises InventoryParseError and
    no EndOfStream is produced.
    """
    if isinstance(source, Path):
        source = str(source)

    context = etree.iterparse(
        source,
        events=("end",),
        recover=False,
        huge_tree=True,
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
    )

    try:
        for _, elem in context:
            if not isinstance(elem.tag, str):
                continue
            tag = _localname(elem)

            if tag == "header":
                yield HeaderClosed(attrib=dict(elem.attrib), children=_child_texts(elem), line=elem.sourceline)
                _release(elem)
            elif tag == "record":
                yield RecordClosed(attrib=dict(elem.attrib), children=_child_texts(elem), line=elem.sourceline)
                _release(elem)
            elif tag == "inventory-list":
                _release(elem)
    except etree.XMLSyntaxError as e:
        line = e.position[0] if e.position else None
        raise InventoryParseError(f"Malformed inventory XML: {e}", line=line) from e

    yield EndOfStream()
