from .errors import (
    InventoryParseError,
    OptionsError,
    SourceNotFoundError,
    StructuralError,
    TargetExistsError,
    TranslationError,
)
from .models import AvailabilityRecord, Future, InventoryHeader, TranslationOptions, TranslationResult
from .translator import to_oci, to_sfcc

__version__ = "1.0.0"

__all__ = [
    "AvailabilityRecord",
    "Future",
    "InventoryHeader",
    "InventoryParseError",
    "OptionsError",
    "SourceNotFoundError",
    "StructuralError",
    "TargetExistsError",
    "TranslationError",
    "TranslationOptions",
    "TranslationResult",
    "to_oci",
    "to_sfcc",
]
