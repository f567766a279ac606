# Copyright (C) 2005  Michael Urman
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from mp3meta._constants import GENRES
from mp3meta._util import BufferView, ByteBuffer

ID3V1_SIZE = 128

# (name, offset, size) of the fields following the "TAG" signature
_FIELDS = (
    ("title", 3, 30),
    ("artist", 33, 30),
    ("album", 63, 30),
    ("year", 93, 4),
    ("comment", 97, 30),
)


class ID3v1Tag:
    """The 128 byte ID3v1 trailer.

    The text fields are raw views into the buffer; they are usually NUL
    or space padded. Use :meth:`text` for a trimmed string.

    Attributes:
        offset (int): position of the tag in the buffer
        title (BufferView)
        artist (BufferView)
        album (BufferView)
        year (BufferView)
        comment (BufferView)
        genre (int): genre code, 255 if unset
    """

    title: BufferView
    artist: BufferView
    album: BufferView
    year: BufferView
    comment: BufferView

    def __init__(self, buffer: ByteBuffer, offset: int):
        self.offset = offset
        for name, start, size in _FIELDS:
            setattr(self, name, buffer.view(offset + start, size))
        self.genre = buffer.byte(offset + 127)

    def text(self, name: str) -> str:
        """The field `name` decoded as Latin-1, cut at the first NUL and
        stripped of spaces.
        """

        value = bytes(getattr(self, name))
        if name == "comment" and self.track is not None:
            value = value[:28]
        return value.split(b"\x00", 1)[0].decode("latin-1").strip()

    @property
    def track(self) -> int | None:
        """The ID3v1.1 track number or None"""

        comment = bytes(self.comment)
        if comment[28] == 0 and comment[29] != 0:
            return comment[29]
        return None

    @property
    def genre_name(self) -> str | None:
        if self.genre < len(GENRES):
            return GENRES[self.genre]
        return None

    def as_dict(self) -> dict[str, object]:
        """All non-empty fields, decoded"""

        result: dict[str, object] = {}
        for name, start, size in _FIELDS:
            value = self.text(name)
            if value:
                result[name] = value
        if self.track is not None:
            result["track"] = self.track
        if self.genre_name is not None:
            result["genre"] = self.genre_name
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ID3v1Tag):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name)
                   for name, start, size in _FIELDS) and \
            self.genre == other.genre

    def pprint(self) -> str:
        return "\n".join(
            "ID3v1 %s=%s" % (k, v) for k, v in self.as_dict().items())


def find_id3v1(buffer: ByteBuffer | bytes) -> ID3v1Tag | None:
    """Returns the ID3v1 tag at the end of the buffer or None"""

    buffer = ByteBuffer.wrap(buffer)
    offset = len(buffer) - ID3V1_SIZE
    if offset < 0 or not buffer.startswith_at(b"TAG", offset):
        return None
    return ID3v1Tag(buffer, offset)
