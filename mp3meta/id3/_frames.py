# Copyright (C) 2005  Michael Urman
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from mp3meta._util import BufferView

from ._specs import (
    PictureType,
    UTF16Mode,
    decode_text,
    find_terminator,
    is_wide,
)
from ._tags import Frame


class TextFrame:
    """Text frame decoding.

    The first payload byte selects the encoding, the rest is the text.
    """

    @staticmethod
    def from_frame(frame: Frame | None,
                   utf16: UTF16Mode = UTF16Mode.ASCII_SUBSET) -> str:
        if frame is None:
            return ""
        data = bytes(frame.data)
        if not data:
            return ""
        return decode_text(data[1:], data[0], utf16)


class APIC:
    """Attached (or linked) Picture.

    Attributes:

    * encoding -- text encoding for the description
    * mime -- a MIME type (e.g. image/png), defaults to image/jpeg
    * type -- the source of the image (3 is the album front cover)
    * desc -- a text description of the image
    * data -- image data as a BufferView into the file buffer
    """

    def __init__(self, encoding: int, mime: str, type: PictureType | int,
                 desc: str, data: BufferView):
        self.encoding = encoding
        self.mime = mime
        self.type = type
        self.desc = desc
        self.data = data

    @classmethod
    def from_frame(cls, frame: Frame,
                   utf16: UTF16Mode = UTF16Mode.ASCII_SUBSET) -> APIC:
        payload = frame.data
        data = bytes(payload)
        if not data:
            return cls(0, "image/jpeg", PictureType.OTHER, "",
                       payload.buffer.clipped_view(payload.end, 0))

        encoding = data[0]

        end = find_terminator(data, 0, 1)
        mime = data[1:end].decode("latin-1")
        if not mime:
            mime = "image/jpeg"
        pos = end + 1

        if pos < len(data):
            type_ = data[pos]
            try:
                type_ = PictureType(type_)
            except ValueError:
                pass
        else:
            type_ = PictureType.OTHER
        pos += 1

        pos = min(pos, len(data))
        end = find_terminator(data, encoding, pos)
        desc = decode_text(data[pos:end], encoding, utf16)
        pos = min(end + (2 if is_wide(encoding) else 1), len(data))

        image = payload.buffer.view(
            payload.offset + pos, len(data) - pos)
        return cls(encoding, mime, type_, desc, image)

    def __repr__(self) -> str:
        return "%s(encoding=%r, mime=%r, type=%r, desc=%r, data=%r)" % (
            type(self).__name__, self.encoding, self.mime, self.type,
            self.desc, self.data)

    def _pprint(self) -> str:
        type_desc = str(self.type)
        if hasattr(self.type, "_pprint"):
            type_desc = self.type._pprint()

        return "%s, %s (%s, %d bytes)" % (
            type_desc, self.desc, self.mime, len(self.data))
