from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from . import settings
from .errors import StructuralError
from .jsonl import JsonlWriter
from .models import AvailabilityRecord, Future, InventoryHeader, TranslationOptions, TranslationResult
from .xml_reader import EndOfStream, HeaderClosed, InventoryEvent, RecordClosed


def parse_int(x: Any) -> Optional[int]:
    # "5" and 5.0 are quantities; True, "3.7" and "abc" are not
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, int):
        return x
    if isinstance(x, float):
        return int(x) if x.is_integer() else None
    s = str(x).strip()
    if not s:
        return None
    try:
        return int(s)
    except ValueError:
        pass
    try:
        f = float(s)
    except ValueError:
        return None
    return int(f) if f.is_integer() else None


def iso_timestamp(dt: datetime) -> str:
    # 2024-01-01T00:00:00.000Z
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def date_to_iso(value: str) -> Optional[str]:
    value = (value or "").strip()
    if not value:
        return None
    try:
        d = date.fromisoformat(value)
        return iso_timestamp(datetime(d.year, d.month, d.day, tzinfo=timezone.utc))
    except ValueError:
        pass
    try:
        return iso_timestamp(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        return None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ToOciTranslator:
    """
    XML inventory events -> OCI availability lines.

    grouped layout: records are held in a SKU -> records map (insertion
    ordered) owned by this translator and drained once at EndOfStream, so
    equal SKUs end up contiguous in the output. Memory grows with the number
    of records in the file.

    streamed layout: a header line is written per inventory-list and every
    record is written as soon as it closes.
    """

    def __init__(
        self,
        writer: JsonlWriter,
        options: Optional[TranslationOptions] = None,
        *,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self.writer = writer
        self.options = (options or TranslationOptions()).validate()
        self.log = logger or logging.getLogger(__name__)
        self.clock = clock
        self.id_factory = id_factory

        self.current_header: Optional[InventoryHeader] = None
        self.result = TranslationResult()
        self._sku_groups: Dict[str, List[AvailabilityRecord]] = {}
        self._finished = False

    @property
    def grouped(self) -> bool:
        return self.options.layout == settings.LAYOUT_GROUPED

    def translate(self, events: Iterable[InventoryEvent]) -> TranslationResult:
        for event in events:
            self.handle(event)
        if not self._finished:
            self.finish()
        return self.result

    def handle(self, event: InventoryEvent) -> None:
        if isinstance(event, HeaderClosed):
            self.on_header(event)
        elif isinstance(event, RecordClosed):
            self.on_record(event)
        elif isinstance(event, EndOfStream):
            self.finish()

    def on_header(self, event: HeaderClosed) -> None:
        list_id = (event.attrib.get("list-id") or "").strip() or None
        self.result.inventories_count += 1

        if list_id is None:
            self.current_header = None
            self.log.debug("Inventory list without list-id at line %s.", event.line)
            return

        self.current_header = InventoryHeader(list_id=list_id, description=event.children.get("description") or None)
        self.log.debug('Inventory location ID: "%s"', list_id)

        if not self.grouped:
            self.writer.write({"locationId": list_id, "mode": self.options.import_mode})

    def build_record(self, event: RecordClosed) -> Optional[AvailabilityRecord]:
        if self.current_header is None:
            raise StructuralError('The "locationId" could not be derived from the SFCC inventory list. Abort...')

        children = event.children
        sku = event.attrib.get("product-id", "")

        on_hand = parse_int(children.get("allocation"))
        if on_hand is None:
            self.log.debug('Inventory record "%s" skipped because of undefined allocation.', sku)
            return None

        if self.options.skip_out_of_stock and on_hand == 0:
            self.log.debug('Inventory record "%s" skipped because of 0 allocation.', sku)
            return None

        record = AvailabilityRecord(
            record_id=self.id_factory(),
            sku=sku,
            on_hand=on_hand,
            effective_date=children.get("allocation-timestamp") or iso_timestamp(self.clock()),
            safety_stock_count=self.options.safety_stock,
            location_id=self.current_header.list_id,
        )

        handling = children.get("preorder-backorder-handling")
        if handling and handling != "none":
            expected = children.get("in-stock-datetime") or None
            if expected is None and children.get("in-stock-date"):
                expected = date_to_iso(children["in-stock-date"])
                if expected is None:
                    self.log.debug('Inventory record "%s": unreadable in-stock-date "%s".', sku, children["in-stock-date"])
            quantity = parse_int(children.get("preorder-backorder-allocation"))
            record.futures = [Future(quantity=quantity or 0, expected_date=expected)]

        return record

    def on_record(self, event: RecordClosed) -> None:
        record = self.build_record(event)
        if record is None:
            self.result.skipped_count += 1
            return

        if self.grouped:
            self._sku_groups.setdefault(record.sku, []).append(record)
        else:
            self.writer.write(record.to_json_dict())
            self.log.debug('Inventory record "%s" for locationId "%s" written.', record.sku, record.location_id)
        self.result.records_count += 1

    def finish(self) -> TranslationResult:
        if self._finished:
            return self.result

        groups, self._sku_groups = self._sku_groups, {}
        for records in groups.values():
            for record in records:
                self.writer.write(record.to_json_dict())
                self.log.debug('Inventory record "%s" for locationId "%s" written.', record.sku, record.location_id)

        self._finished = True
        return self.result
