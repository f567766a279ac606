# Copyright 2006 Joe Wreschnig
#           2026 mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""Utility classes for mp3meta.

You should not rely on the interfaces here being stable. They are
intended for internal use in mp3meta only.
"""

from __future__ import annotations

import struct


class MP3MetaError(Exception):
    """Base class for all custom exceptions in mp3meta"""

    __module__ = "mp3meta"


class BufferTooSmall(MP3MetaError, ValueError):
    """A fixed size structure doesn't fit into the remaining buffer"""

    __module__ = "mp3meta"


class cdata:
    """C character buffer to Python numeric type conversions."""

    error = struct.error

    uint32_be = staticmethod(lambda data: struct.unpack('>I', data)[0])


class ByteBuffer:
    """ByteBuffer(data)

    The immutable content of a loaded file.

    Everything mp3meta decodes is derived from one of these. The content
    can't be changed after creation and all slices handed out are
    :class:`BufferView` instances which keep a reference to the buffer.

    Arguments:
        data (bytes): the file content, anything `bytes()` accepts
    """

    __slots__ = ("_data",)

    _data: bytes

    def __init__(self, data: bytes | bytearray | memoryview = b""):
        if isinstance(data, ByteBuffer):
            data = data._data
        object.__setattr__(self, "_data", bytes(data))

    def __setattr__(self, name, value):
        raise AttributeError("ByteBuffer is immutable")

    @classmethod
    def from_file(cls, filename: str) -> ByteBuffer:
        """Read a whole file into a new buffer"""

        with open(filename, "rb") as h:
            return cls(h.read())

    @classmethod
    def wrap(cls, data: ByteBuffer | bytes | bytearray | memoryview
             ) -> ByteBuffer:
        """Returns `data` if it already is a ByteBuffer, a new one otherwise"""

        if isinstance(data, cls):
            return data
        return cls(data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __repr__(self) -> str:
        return f"<{type(self).__name__} size={len(self._data)}>"

    def byte(self, offset: int) -> int:
        """The byte value at `offset`, raises BufferTooSmall if outside"""

        if not 0 <= offset < len(self._data):
            raise BufferTooSmall(
                f"offset {offset} outside of buffer (size {len(self._data)})")
        return self._data[offset]

    def read(self, offset: int, size: int) -> bytes:
        """Returns `size` bytes starting at `offset`.

        Raises BufferTooSmall if the range doesn't fit into the buffer.
        """

        if offset < 0 or size < 0 or offset + size > len(self._data):
            raise BufferTooSmall(
                f"can't read {size} bytes at {offset} "
                f"(size {len(self._data)})")
        return self._data[offset:offset + size]

    def view(self, offset: int, size: int) -> BufferView:
        """Like read() but returns a BufferView"""

        if offset < 0 or size < 0 or offset + size > len(self._data):
            raise BufferTooSmall(
                f"can't view {size} bytes at {offset} "
                f"(size {len(self._data)})")
        return BufferView(self, offset, size)

    def clipped_view(self, offset: int, size: int) -> BufferView:
        """A view starting at `offset` with at most `size` bytes, cut
        at the buffer end.
        """

        offset = max(0, min(offset, len(self._data)))
        size = max(0, min(size, len(self._data) - offset))
        return BufferView(self, offset, size)

    def startswith_at(self, prefix: bytes, offset: int) -> bool:
        """Whether the bytes at `offset` equal `prefix`. Out of range
        always compares unequal.
        """

        if offset < 0 or offset + len(prefix) > len(self._data):
            return False
        return self._data.startswith(prefix, offset)

    def find(self, sub: bytes, start: int = 0, end: int | None = None) -> int:
        if end is None:
            end = len(self._data)
        return self._data.find(sub, start, end)


class BufferView:
    """BufferView(buffer, offset, size)

    A non-owning slice of a :class:`ByteBuffer`.

    The view keeps its buffer alive, so the data it points to stays valid
    as long as the view is reachable. Use `bytes(view)` to get a copy.

    Attributes:
        buffer (ByteBuffer): the buffer this view points into
        offset (int): start offset in the buffer
        size (int): number of bytes
    """

    __slots__ = ("buffer", "offset", "size")

    buffer: ByteBuffer
    offset: int
    size: int

    def __init__(self, buffer: ByteBuffer, offset: int, size: int):
        if offset < 0 or size < 0 or offset + size > len(buffer):
            raise BufferTooSmall(
                f"view {offset}+{size} outside of buffer "
                f"(size {len(buffer)})")
        self.buffer = buffer
        self.offset = offset
        self.size = size

    @property
    def end(self) -> int:
        return self.offset + self.size

    def __len__(self) -> int:
        return self.size

    def __bytes__(self) -> bytes:
        return bytes(self.buffer)[self.offset:self.end]

    def tobytes(self) -> bytes:
        return bytes(self)

    def memoryview(self) -> memoryview:
        """A read-only memoryview of the data, without copying"""

        return memoryview(bytes(self.buffer))[self.offset:self.end]

    def __getitem__(self, index: int) -> int:
        if not -self.size <= index < self.size:
            raise IndexError("view index out of range")
        if index < 0:
            index += self.size
        return self.buffer.byte(self.offset + index)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BufferView):
            return bytes(self) == bytes(other)
        if isinstance(other, (bytes, bytearray)):
            return bytes(self) == other
        return NotImplemented

    def __repr__(self) -> str:
        return "<%s offset=%d size=%d>" % (
            type(self).__name__, self.offset, self.size)
