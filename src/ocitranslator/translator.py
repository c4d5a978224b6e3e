from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from . import settings
from .errors import SourceNotFoundError, TargetExistsError
from .jsonl import JsonlWriter, iter_jsonl_lines
from .models import TranslationOptions, TranslationResult
from .to_oci import ToOciTranslator, utcnow
from .to_sfcc import ToSfccTranslator
from .xml_reader import iter_inventory_events
from .xml_writer import XmlWriter

logger = logging.getLogger(__name__)


def check_paths(source: str | Path, target: str | Path, options: TranslationOptions) -> tuple[Path, Path]:
    source = Path(source)
    target = Path(target)
    if not source.exists():
        raise SourceNotFoundError(source)
    if target.exists() and not options.override:
        raise TargetExistsError(target)
    return source, target


def to_oci(
    source: str | Path,
    target: str | Path,
    options: Optional[TranslationOptions] = None,
    *,
    log: Optional[logging.Logger] = None,
    clock: Callable[[], datetime] = utcnow,
) -> TranslationResult:
    """
    Translate an SFCC inventory XML file into an OCI availability JSONL file.

    Nothing is opened until the options and both paths are checked. On a
    failure mid-stream the partial target file stays where it is.
    """
    options = (options or TranslationOptions()).validate()
    log = log or logger
    source, target = check_paths(source, target, options)

    if options.mode and options.mode.strip().upper() not in settings.SUPPORTED_MODES:
        log.warning('Import mode "%s" is not supported, using "%s".', options.mode, settings.DEFAULT_MODE)

    log.info('Translating SFCC inventory "%s" into OCI file "%s" (%s layout).', source, target, options.layout)

    target.parent.mkdir(parents=True, exist_ok=True)
    with source.open("rb") as src, target.open("w", encoding=settings.ENCODING, newline="\n") as out:
        translator = ToOciTranslator(JsonlWriter(out), options, logger=log, clock=clock)
        result = translator.translate(iter_inventory_events(src))

    log.debug("%s records skipped.", result.skipped_count)
    return result


def to_sfcc(
    source: str | Path,
    target: str | Path,
    options: Optional[TranslationOptions] = None,
    *,
    log: Optional[logging.Logger] = None,
) -> TranslationResult:
    """Translate an OCI availability JSONL file into an SFCC inventory XML file."""
    options = options or TranslationOptions()
    log = log or logger
    source, target = check_paths(source, target, options)

    log.info('Translating OCI file "%s" into SFCC inventory "%s".', source, target)

    target.parent.mkdir(parents=True, exist_ok=True)
    with source.open("r", encoding="utf-8-sig") as src, target.open("w", encoding=settings.ENCODING, newline="\n") as out:
        translator = ToSfccTranslator(XmlWriter(out), options, logger=log)
        result = translator.translate(iter_jsonl_lines(src, name=str(source)))

    log.debug("%s records skipped.", result.skipped_count)
    return result
