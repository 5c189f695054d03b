#!/usr/bin/env python3
"""Download a website's favicon from the command line."""
import argparse
import asyncio
import logging
import sys

from favicon_grabber import FaviconError, download_favicon
from favicon_grabber.core import config

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("url", help="Website, or direct link to an icon file")
    parser.add_argument(
        "-o", "--output",
        default=config.DEFAULT_OUT_PATH_FORMAT,
        help="Output path template; %%basename%%, %%filestem%% and %%extname%% are replaced",
    )
    parser.add_argument("--ext-from-content-type", action="store_true",
                        help="Append the extension implied by the content-type header")
    parser.add_argument("--ext-from-magic-number", action="store_true",
                        help="Rename the file to match its byte signature")
    parser.add_argument("--ignore-content-type", action="store_true",
                        help="Accept any content-type")
    parser.add_argument("--search-meta-tags", action="store_true",
                        help="Also look for icons in <meta> tags")
    return parser


async def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    overrides = {
        "file_ext_from_content_type_header": args.ext_from_content_type,
        "file_ext_from_magic_number": args.ext_from_magic_number,
        "ignore_content_type_header": args.ignore_content_type,
        "search_meta_tags": args.search_meta_tags,
    }

    try:
        path = await download_favicon(args.url, args.output, overrides)
    except FaviconError as e:
        logger.error(f"❌ {e}")
        return 1

    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
