#!/usr/bin/env python
"""
Convert HTML and YAML recipe exports into Mela recipe files.

Run manually:
    mela-convert            # both formats, one combined bundle
    mela-convert html       # HTML pages only
    mela-convert yml --recipes-dir ./my-recipes --output-dir ./my-output
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mela_converter.app.core.config import get_settings
from mela_converter.app.services.converter_service import COMMANDS, RecipeConverter

logger = logging.getLogger("mela_convert")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mela-convert", description="Convert HTML/YAML recipes to Mela recipe files"
    )
    parser.add_argument("command", nargs="?", default="all", choices=COMMANDS)
    parser.add_argument("--recipes-dir", type=Path, help="Directory holding the HTML/ and YML/ folders")
    parser.add_argument("--output-dir", type=Path, help="Where .melarecipe files and the bundle go")
    parser.add_argument("--title-case", choices=("title", "proper"), help="Title casing mode")
    parser.add_argument("--image-format", choices=("raw", "data_url"), help="Inline image payload format")
    parser.add_argument("--log-level", help="Logging level (default from MELA_LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    overrides = {
        "recipes_dir": args.recipes_dir,
        "output_dir": args.output_dir,
        "title_case_mode": args.title_case,
        "image_payload_format": args.image_format,
        "log_level": args.log_level,
    }
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(RecipeConverter(settings).run(args.command))
    except Exception:
        logger.exception("Error during conversion")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
