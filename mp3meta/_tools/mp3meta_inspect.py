# Copyright 2005 Joe Wreschnig
#           2026 mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Tags and first frame parameters for any given MP3 file."""

from __future__ import annotations

import argparse
import logging
import sys


class Arguments(argparse.Namespace):
    files: list[str] = []
    scan_all: bool = False
    decode_utf16: bool = False
    debug: bool = False


def main(argv: list[str]) -> int:
    from mp3meta import File, MP3MetaError
    from mp3meta.id3 import UTF16Mode

    parser = argparse.ArgumentParser(usage="%(prog)s [options] FILE [FILE...]")
    parser.add_argument("--scan-all", action="store_true", dest="scan_all",
                        help="Read every ID3 signature as a tag")
    parser.add_argument("--decode-utf16", action="store_true",
                        dest="decode_utf16",
                        help="Fully decode UTF-16 text")
    parser.add_argument("--debug", action="store_true",
                        help="Print debug messages")
    parser.add_argument("files", nargs="+", metavar="FILE",
                        help="Files to inspect")

    args = parser.parse_args(argv[1:], namespace=Arguments())

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    utf16 = UTF16Mode.DECODE if args.decode_utf16 else UTF16Mode.ASCII_SUBSET

    status = 0
    for filename in args.files:
        print("--", filename)
        try:
            print(File(filename, scan_all=args.scan_all, utf16=utf16).pprint())
        except (OSError, MP3MetaError) as err:
            print(str(err))
            status = 1
        print("")
    return status


def entry_point() -> None:
    sys.exit(main(sys.argv))
