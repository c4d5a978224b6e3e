from __future__ import annotations


class TranslationError(Exception):
    """Base class for every failure the translation engine reports."""


class SourceNotFoundError(TranslationError, FileNotFoundError):
    def __init__(self, source: object) -> None:
        super().__init__(f'The source file "{source}" does not exist. Abort...')
        self.source = source


class TargetExistsError(TranslationError, FileExistsError):
    def __init__(self, target: object) -> None:
        super().__init__(f'The target file "{target}" exists. Abort...')
        self.target = target


class OptionsError(TranslationError, ValueError):
    pass


class StructuralError(TranslationError):
    """The input is well-formed but its records and headers do not nest."""


class InventoryParseError(TranslationError):
    """Malformed XML document or malformed JSON line."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line
