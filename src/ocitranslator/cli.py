from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from . import __version__, settings
from .errors import TranslationError
from .logger import setup_logger
from .models import TranslationOptions
from .translator import to_oci, to_sfcc

PROG = "oci-inventory-translator"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog=PROG, description="Translate inventory files between SFCC XML and OCI JSONL.")
    p.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    sub = p.add_subparsers(dest="command")

    oci = sub.add_parser("tooci", help="Translate an SFCC inventory XML file into an OCI import file")
    oci.add_argument("source", help="The SFCC inventory source file")
    oci.add_argument("target", help="The path where to store the generated file")
    oci.add_argument("-o", "--override", action="store_true", help="Override the target file.")
    oci.add_argument("-m", "--mode", default=settings.DEFAULT_MODE, help="The import mode. Default: UPDATE")
    oci.add_argument(
        "-s", "--safety", type=int, default=0,
        help="The safety stock count applied to all records within the file. Default: 0",
    )
    oci.add_argument("--skipout", "-sout", action="store_true", help="Skip out-of-stock products.")
    oci.add_argument(
        "--layout", choices=settings.LAYOUTS, default=settings.DEFAULT_LAYOUT,
        help="grouped: records grouped by SKU (default). streamed: header line per inventory list.",
    )
    oci.add_argument("-v", "--verbose", action="store_true", help="Log every skipped and written record.")

    sfcc = sub.add_parser("tosfcc", help="Translate an OCI inventory file into an SFCC inventory XML file")
    sfcc.add_argument("source", help="The OCI inventory source file")
    sfcc.add_argument("target", help="The path where to store the generated file")
    sfcc.add_argument("-o", "--override", action="store_true", help="Override the target file.")
    sfcc.add_argument("--skipout", "-sout", action="store_true", help="Skip out-of-stock products.")
    sfcc.add_argument("-v", "--verbose", action="store_true", help="Log every skipped and written record.")

    args = p.parse_args(argv)
    if args.command is None:
        p.print_help()
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.command is None:
        return 0

    log = setup_logger("ocitranslator", logging.DEBUG if args.verbose else None)
    log.info("%s %s", PROG, __version__)
    log.info("")

    try:
        if args.command == "tooci":
            options = TranslationOptions(
                override=args.override,
                safety_stock=args.safety,
                mode=args.mode,
                skip_out_of_stock=args.skipout,
                layout=args.layout,
            )
            result = to_oci(args.source, args.target, options, log=log)
        else:
            options = TranslationOptions(override=args.override, skip_out_of_stock=args.skipout)
            result = to_sfcc(args.source, args.target, options, log=log)
    except TranslationError as e:
        log.error("%s", e)
        return 1

    log.info("End process: %s records translated from %s inventories.", result.records_count, result.inventories_count)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
