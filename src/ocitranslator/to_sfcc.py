from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from . import settings
from .errors import StructuralError
from .jsonl import FlatLine
from .models import InventoryHeader, TranslationOptions, TranslationResult
from .to_oci import parse_int
from .xml_writer import XmlWriter


class ListState(Enum):
    NO_LIST_OPEN = "no-list-open"
    LIST_OPEN = "list-open"


def header_from_line(data: Dict[str, Any]) -> Optional[InventoryHeader]:
    group_id = data.get("groupId")
    location_id = data.get("locationId")
    if group_id:
        return InventoryHeader(list_id=str(group_id), is_group=True)
    if location_id:
        return InventoryHeader(list_id=str(location_id))
    return None


def backorder_allocation(futures: List[Any]) -> int:
    total = 0
    for future in futures:
        if isinstance(future, dict):
            total += parse_int(future.get("quantity")) or 0
    return total


class ToSfccTranslator:
    """
    OCI availability lines -> SFCC inventory XML.

    Two states: NO_LIST_OPEN and LIST_OPEN (an <inventory-list> with its
    <records> container open). Records can only be written in LIST_OPEN;
    anything else raises StructuralError instead of producing broken XML.

    Only the first future's expectedDate survives; quantities of all futures
    are summed into preorder-backorder-allocation.
    """

    def __init__(
        self,
        xml: XmlWriter,
        options: Optional[TranslationOptions] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.xml = xml
        self.options = options or TranslationOptions()
        self.log = logger or logging.getLogger(__name__)

        self.state = ListState.NO_LIST_OPEN
        self.current_header: Optional[InventoryHeader] = None
        self.result = TranslationResult()
        self._started = False
        self._finished = False

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self._started:
            return
        self.xml.start_document("1.0", settings.ENCODING)
        self.xml.start_element("inventory", {"xmlns": settings.SFCC_NAMESPACE})
        self._started = True

    def open_list(self, header: InventoryHeader) -> None:
        if self.state is ListState.LIST_OPEN:
            self.close_list()

        kind = "group" if header.is_group else "location"

        self.xml.start_element("inventory-list")
        self.xml.start_element("header", {"list-id": header.list_id})
        self.xml.write_element("description", header.description or f"{header.list_id} {kind}")
        self.xml.end_element()
        self.xml.start_element("records")

        self.state = ListState.LIST_OPEN
        self.current_header = header
        self.result.inventories_count += 1
        self.log.debug('Inventory list "%s" opened.', header.list_id)

    def close_list(self) -> None:
        if self.state is not ListState.LIST_OPEN:
            raise StructuralError("No inventory list is open.")
        self.xml.end_element()  # records
        self.xml.end_element()  # inventory-list
        self.state = ListState.NO_LIST_OPEN
        self.current_header = None

    def write_record(self, data: Dict[str, Any], on_hand: int) -> None:
        if self.state is not ListState.LIST_OPEN:
            raise StructuralError(f'Inventory record "{data.get("sku")}" has no open inventory list.')

        futures = data.get("futures") or []
        if not isinstance(futures, list):
            futures = []

        xml = self.xml
        xml.start_element("record", {"product-id": data["sku"]})
        xml.write_element("allocation", on_hand)
        if data.get("ato") is not None:
            xml.write_element("ats", data["ato"])
        if data.get("atf") is not None:
            xml.write_element("stock-level", data["atf"])
        if data.get("effectiveDate"):
            xml.write_element("allocation-timestamp", data["effectiveDate"])
        xml.write_element("perpetual", "false")
        xml.write_element("preorder-backorder-handling", "backorder" if futures else "none")

        if futures:
            xml.write_element("preorder-backorder-allocation", backorder_allocation(futures))
            first = futures[0] if isinstance(futures[0], dict) else {}
            if first.get("expectedDate"):
                xml.write_element("in-stock-datetime", first["expectedDate"])

        xml.end_element()
        self.result.records_count += 1

    # ------------------------------------------------------------------
    # input
    # ------------------------------------------------------------------
    def translate(self, lines: Iterable[FlatLine]) -> TranslationResult:
        self.start()
        for line in lines:
            self.handle(line)
        if not self._finished:
            self.finish()
        return self.result

    def handle(self, line: FlatLine) -> None:
        self.start()
        data = line.data

        if isinstance(data, dict):
            if data.get("sku"):
                self.on_record(data, line.line_no)
            else:
                header = header_from_line(data)
                if header is not None:
                    self.open_list(header)
                else:
                    self.log.debug("Line %s ignored: neither a header nor a record.", line.line_no)
        else:
            self.log.debug("Line %s ignored: not a JSON object.", line.line_no)

        if line.last:
            self.finish()

    def on_record(self, data: Dict[str, Any], line_no: int) -> None:
        sku = data["sku"]

        on_hand = parse_int(data.get("onHand"))
        if on_hand is None:
            self.log.debug('Inventory record "%s" skipped because of undefined allocation.', sku)
            self.result.skipped_count += 1
            return

        if self.options.skip_out_of_stock and on_hand == 0:
            self.log.debug('Inventory record "%s" skipped because of 0 allocation.', sku)
            self.result.skipped_count += 1
            return

        location_id = data.get("locationId")
        # grouped-layout files carry no header lines, records name their location
        if location_id and (self.current_header is None or self.current_header.list_id != str(location_id)):
            self.open_list(InventoryHeader(list_id=str(location_id)))

        if self.state is ListState.NO_LIST_OPEN:
            raise StructuralError(f'Inventory record "{sku}" at line {line_no} is not preceded by a header line. Abort...')

        self.write_record(data, on_hand)
        self.log.debug('Inventory record "%s" written.', sku)

    def finish(self) -> TranslationResult:
        if self._finished:
            return self.result
        self.start()
        if self.state is ListState.LIST_OPEN:
            self.close_list()
        self.xml.end_element()  # inventory
        self.xml.end_document()
        self._finished = True
        return self.result
