from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from . import settings
from .errors import OptionsError


@dataclass(frozen=True)
class InventoryHeader:
    list_id: str
    description: Optional[str] = None
    is_group: bool = False


@dataclass(frozen=True)
class Future:
    quantity: int
    expected_date: Optional[str] = None

    def to_json_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"quantity": self.quantity}
        if self.expected_date is not None:
            out["expectedDate"] = self.expected_date
        return out


@dataclass
class AvailabilityRecord:
    record_id: str
    sku: str
    on_hand: int
    effective_date: str
    safety_stock_count: int
    location_id: Optional[str] = None
    futures: Optional[List[Future]] = None

    def to_json_dict(self) -> Dict[str, Any]:
        # key order matches what the OCI import files have always looked like
        out: Dict[str, Any] = {
            "recordId": self.record_id,
            "onHand": self.on_hand,
            "sku": self.sku,
            "effectiveDate": self.effective_date,
            "safetyStockCount": self.safety_stock_count,
        }
        if self.location_id is not None:
            out["locationId"] = self.location_id
        if self.futures:
            out["futures"] = [f.to_json_dict() for f in self.futures]
        return out


@dataclass
class TranslationOptions:
    override: bool = False
    safety_stock: int = 0
    mode: str = settings.DEFAULT_MODE
    skip_out_of_stock: bool = False
    layout: str = settings.DEFAULT_LAYOUT

    def validate(self) -> "TranslationOptions":
        if isinstance(self.safety_stock, bool) or not isinstance(self.safety_stock, int):
            raise OptionsError(f"The safety stock must be an integer, got {self.safety_stock!r}.")
        if self.safety_stock < 0:
            raise OptionsError(f"The safety stock must be a non-negative integer, got {self.safety_stock}.")
        if self.layout not in settings.LAYOUTS:
            raise OptionsError(f"Unknown layout {self.layout!r}. Expected one of: {', '.join(settings.LAYOUTS)}.")
        return self

    @property
    def import_mode(self) -> str:
        mode = (self.mode or settings.DEFAULT_MODE).strip().upper()
        return mode if mode in settings.SUPPORTED_MODES else settings.DEFAULT_MODE


@dataclass
class TranslationResult:
    records_count: int = 0
    inventories_count: int = 0
    skipped_count: int = field(default=0, compare=False)

    def as_dict(self) -> Dict[str, int]:
        return {"recordsCount": self.records_count, "inventoriesCount": self.inventories_count}
