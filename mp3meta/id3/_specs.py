# Copyright (C) 2005  Michael Urman
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import codecs
from enum import Enum, IntEnum


class PictureType(IntEnum):
    """Enumeration of image types defined by the ID3 standard for the APIC
    frame.
    """

    OTHER = 0
    """Other"""

    FILE_ICON = 1
    """32x32 pixels 'file icon' (PNG only)"""

    OTHER_FILE_ICON = 2
    """Other file icon"""

    COVER_FRONT = 3
    """Cover (front)"""

    COVER_BACK = 4
    """Cover (back)"""

    LEAFLET_PAGE = 5
    """Leaflet page"""

    MEDIA = 6
    """Media (e.g. label side of CD)"""

    LEAD_ARTIST = 7
    """Lead artist/lead performer/soloist"""

    ARTIST = 8
    """Artist/performer"""

    CONDUCTOR = 9
    """Conductor"""

    BAND = 10
    """Band/Orchestra"""

    COMPOSER = 11
    """Composer"""

    LYRICIST = 12
    """Lyricist/text writer"""

    RECORDING_LOCATION = 13
    """Recording Location"""

    DURING_RECORDING = 14
    """During recording"""

    DURING_PERFORMANCE = 15
    """During performance"""

    SCREEN_CAPTURE = 16
    """Movie/video screen capture"""

    FISH = 17
    """A bright coloured fish"""

    ILLUSTRATION = 18
    """Illustration"""

    BAND_LOGOTYPE = 19
    """Band/artist logotype"""

    PUBLISHER_LOGOTYPE = 20
    """Publisher/Studio logotype"""

    def _pprint(self) -> str:
        return self.name.lower().replace("_", " ")


class Encoding(IntEnum):
    """Text Encoding"""

    LATIN1 = 0
    """ISO-8859-1"""

    UTF16 = 1
    """UTF-16 with BOM"""

    UTF16BE = 2
    """UTF-16BE without BOM"""

    UTF8 = 3
    """UTF-8"""


class UTF16Mode(Enum):
    """How text in the two UTF-16 encodings gets decoded"""

    ASCII_SUBSET = "ascii-subset"
    """Keep every byte at an even offset which is in 1..127 and drop the
    rest. This loses the BOM, all non-ASCII characters and everything
    stored big endian; it is the default for compatibility with older
    output.
    """

    DECODE = "decode"
    """Real UTF-16 decoding"""


def is_wide(encoding: int) -> bool:
    """Whether strings in `encoding` end with two NUL bytes"""

    return encoding in (Encoding.UTF16, Encoding.UTF16BE)


def find_terminator(data: bytes, encoding: int, start: int = 0) -> int:
    """Returns the offset of the string terminator in `data` at or after
    `start`, or len(data) if the string isn't terminated.

    UTF-16 strings end with a NUL pair on a two byte step from `start`,
    everything else with a single NUL.
    """

    if is_wide(encoding):
        pos = start
        while pos < len(data) - 1:
            if data[pos] == 0 and data[pos + 1] == 0:
                return pos
            pos += 2
        return len(data)

    index = data.find(b"\x00", start)
    if index == -1:
        return len(data)
    return index


def _ascii_subset(data: bytes) -> str:
    return "".join(chr(b) for b in data[::2] if 0 < b < 128)


def _decode_utf16(data: bytes, encoding: int) -> str:
    if encoding == Encoding.UTF16BE:
        codec = "utf-16-be"
    elif data[:2] in (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE):
        codec = "utf-16"
    else:
        # missing BOM, content is usually utf-16-le
        codec = "utf-16-le"
    if len(data) % 2:
        data = data[:-1]
    return data.decode(codec, "replace").rstrip("\x00")


def decode_text(data: bytes, encoding: int,
                utf16: UTF16Mode = UTF16Mode.ASCII_SUBSET) -> str:
    """Decode an ID3v2 text payload (without the encoding byte).

    Latin-1 and UTF-8 are returned as is, including any NUL bytes, since
    the frame size bounds the text. Unknown encodings give an empty
    string.
    """

    if encoding == Encoding.LATIN1:
        return data.decode("latin-1")
    elif encoding == Encoding.UTF8:
        return data.decode("utf-8", "replace")
    elif is_wide(encoding):
        if utf16 is UTF16Mode.DECODE:
            return _decode_utf16(data, encoding)
        return _ascii_subset(data)
    return ""
