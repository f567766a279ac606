# Copyright (C) 2005  Michael Urman
#               2006  Lukas Lalinsky
#               2013  Christoph Reiter
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from mp3meta._util import BufferView, ByteBuffer

from ._frames import APIC, TextFrame
from ._specs import PictureType, UTF16Mode
from ._tags import Frame, ID3Header, iter_frames, scan_id3v2

# frame ID -> attribute name
TEXT_FRAMES = {
    "TIT2": "title",
    "TPE1": "artist",
    "TALB": "album",
    "TYER": "year",
    "TDRC": "year",
    "TRCK": "track",
    "TCON": "genre",
}

FIELDS = ("title", "artist", "album", "year", "track", "genre",
          "mime", "description", "picture_type", "picture")


class ID3:
    """ID3(buffer=None, scan_all=False, utf16=UTF16Mode.ASCII_SUBSET)

    Metadata collected from the ID3v2 tags of a buffer.

    If a buffer is given, :meth:`load` is called with it and the other
    arguments. If not, all fields are `None`.

    ::

        ID3(ByteBuffer.from_file("foo.mp3"))
        # same as
        t = ID3()
        t.load(ByteBuffer.from_file("foo.mp3"))

    Fields not found in any tag stay `None`. If a frame appears more than
    once, the last one wins.

    Attributes:
        title (str)
        artist (str)
        album (str)
        year (str): from TYER or TDRC
        track (str)
        genre (str)
        mime (str): MIME type of the picture
        description (str): description of the picture
        picture_type (PictureType)
        picture (BufferView): the image data, pointing into the buffer
        tags (list[ID3Header]): the tag headers that were read
        anomalies (list[int]): offsets of "ID3" signatures not read as tags
        unknown_frames (list[str]): IDs of frames that were skipped
    """

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    year: str | None = None
    track: str | None = None
    genre: str | None = None
    mime: str | None = None
    description: str | None = None
    picture_type: PictureType | int | None = None
    picture: BufferView | None = None

    def __init__(self, buffer: ByteBuffer | bytes | None = None, **kwargs):
        self.tags: list[ID3Header] = []
        self.anomalies: list[int] = []
        self.unknown_frames: list[str] = []
        if buffer is not None:
            self.load(buffer, **kwargs)

    @property
    def version(self) -> tuple[int, int, int] | None:
        """Version of the first tag read, or None"""

        if self.tags:
            return self.tags[0].version
        return None

    def load(self, buffer: ByteBuffer | bytes, scan_all: bool = False,
             utf16: UTF16Mode = UTF16Mode.ASCII_SUBSET) -> None:
        """Load tags from a buffer.

        Args:
            buffer (ByteBuffer): the file content
            scan_all (bool): Treat every "ID3" signature in the buffer as
                a tag, not only the one at offset 0.
            utf16 (UTF16Mode): how to decode UTF-16 text
        """

        buffer = ByteBuffer.wrap(buffer)

        for name in FIELDS:
            self.__dict__.pop(name, None)
        self.unknown_frames = []

        self.tags, self.anomalies = scan_id3v2(buffer, scan_all)
        for header in self.tags:
            for frame in iter_frames(buffer, header):
                self._loaded_frame(frame, utf16)

    def _loaded_frame(self, frame: Frame, utf16: UTF16Mode) -> None:
        frame_id = frame.FrameID
        if frame_id in TEXT_FRAMES:
            setattr(self, TEXT_FRAMES[frame_id],
                    TextFrame.from_frame(frame, utf16))
        elif frame_id == "APIC":
            apic = APIC.from_frame(frame, utf16)
            self.mime = apic.mime
            self.description = apic.desc
            self.picture_type = apic.type
            self.picture = apic.data
        else:
            self.unknown_frames.append(frame_id)

    def as_dict(self) -> dict[str, object]:
        """All fields which are set"""

        result = {}
        for name in FIELDS:
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ID3):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return "<%s %r>" % (type(self).__name__, self.as_dict())

    def pprint(self) -> str:
        """Text summary of all fields which are set"""

        lines = []
        for name, value in self.as_dict().items():
            if name == "picture":
                value = "%d bytes" % len(value)
            elif name == "picture_type" and hasattr(value, "_pprint"):
                value = value._pprint()
            lines.append("%s=%s" % (name, value))
        return "\n".join(lines)
