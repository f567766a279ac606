# Copyright (C) 2005  Michael Urman
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

import logging
import struct
from collections.abc import Iterator

from mp3meta._util import BufferTooSmall, BufferView, ByteBuffer

from ._util import BitPaddedInt, ID3NoHeaderError

logger = logging.getLogger(__name__)

HEADER_SIZE = 10
FRAME_HEADER_SIZE = 10


class ID3Header:
    """ID3Header(buffer, offset=0)

    The 10 byte ID3v2 tag header at `offset`.

    Raises ID3NoHeaderError if there is no "ID3" signature at the offset
    or the header doesn't fit into the buffer.

    Attributes:
        offset (int): position of the header in the buffer
        version (tuple[int]): e.g. (2, 4, 0)
        flags (int)
        size (int): size of the tag body, excluding this header
    """

    def __init__(self, buffer: ByteBuffer, offset: int = 0):
        try:
            data = buffer.read(offset, HEADER_SIZE)
        except BufferTooSmall:
            raise ID3NoHeaderError(
                f"no room for an ID3 header at {offset}") from None

        id3, vmaj, vrev, flags, size = struct.unpack('>3sBBB4s', data)
        if id3 != b'ID3':
            raise ID3NoHeaderError(f"no ID3 tag at {offset}")

        self.buffer = buffer
        self.offset = offset
        self.version = (2, vmaj, vrev)
        self.flags = flags
        self.size = BitPaddedInt(size)
        if not BitPaddedInt.has_valid_padding(size):
            logger.debug("ID3 tag at %d has an invalid synchsafe size", offset)

    @property
    def major(self) -> int:
        return self.version[1]

    @property
    def f_unsynch(self) -> bool:
        return bool(self.flags & 0x80)

    @property
    def f_extended(self) -> bool:
        return bool(self.flags & 0x40)

    @property
    def f_experimental(self) -> bool:
        return bool(self.flags & 0x20)

    @property
    def f_footer(self) -> bool:
        return bool(self.flags & 0x10)

    @property
    def body_start(self) -> int:
        return self.offset + HEADER_SIZE

    @property
    def body_end(self) -> int:
        """End of the tag as declared, may be past the buffer end"""

        return self.body_start + self.size

    def __repr__(self) -> str:
        return "<%s offset=%d version=2.%d.%d size=%d>" % (
            type(self).__name__, self.offset, self.version[1],
            self.version[2], self.size)


class Frame:
    """One ID3v2 frame inside a tag.

    Attributes:
        FrameID (str): the four character frame identifier
        size (int): payload size as declared in the frame header
        flags (int)
        offset (int): position of the frame header in the buffer
        data (BufferView): the payload, cut at the buffer end
    """

    def __init__(self, header: ID3Header, offset: int, frame_id: bytes,
                 size: int, flags: int, data: BufferView):
        self.header = header
        self.offset = offset
        self.FrameID = frame_id.decode("latin-1")
        self.size = size
        self.flags = flags
        self.data = data

    @property
    def truncated(self) -> bool:
        return len(self.data) < self.size

    def __repr__(self) -> str:
        return "<%s %s offset=%d size=%d>" % (
            type(self).__name__, self.FrameID, self.offset, self.size)


def scan_id3v2(buffer: ByteBuffer, scan_all: bool = False
               ) -> tuple[list[ID3Header], list[int]]:
    """Search the whole buffer for ID3v2 tag headers.

    A real tag can only start at offset 0, so by default only a header
    there counts as a tag and the offsets of all other "ID3" signatures are
    returned as anomalies. With `scan_all` every signature is treated as a
    tag, which also picks up signatures inside frame payloads or audio
    data.

    Returns:
        (headers, anomalies)
    """

    headers: list[ID3Header] = []
    anomalies: list[int] = []

    last = len(buffer) - HEADER_SIZE
    pos = buffer.find(b"ID3", 0, last + 3) if last >= 0 else -1
    while pos != -1:
        if pos == 0 or scan_all:
            headers.append(ID3Header(buffer, pos))
        else:
            logger.debug("ignoring ID3 signature at offset %d", pos)
            anomalies.append(pos)
        pos = buffer.find(b"ID3", pos + 1, last + 3)

    return headers, anomalies


def iter_frames(buffer: ByteBuffer, header: ID3Header) -> Iterator[Frame]:
    """Yields all frames of the tag in order.

    Stops at the declared end of the tag, at the buffer end or when
    padding (a zero byte instead of a frame ID) is reached. A frame
    claiming more data than the buffer holds gets a cut payload and ends
    the iteration.
    """

    if header.major == 4:
        bpi = BitPaddedInt
    else:
        def bpi(data):
            return BitPaddedInt(data, bits=8)

    pos = header.body_start
    end = header.body_end
    while True:
        if pos + FRAME_HEADER_SIZE > end:
            return
        try:
            data = buffer.read(pos, FRAME_HEADER_SIZE)
        except BufferTooSmall:
            logger.debug("ID3 tag at %d ends past the buffer",
                         header.offset)
            return
        name, size, flags = struct.unpack('>4s4sH', data)
        if name[0] == 0:
            return
        size = bpi(size)

        start = pos + FRAME_HEADER_SIZE
        payload = buffer.clipped_view(start, size)
        frame = Frame(header, pos, name, size, flags, payload)
        if frame.truncated:
            logger.debug("frame %r at %d is cut off by the buffer end",
                         frame.FrameID, pos)
        yield frame
        pos = start + size
