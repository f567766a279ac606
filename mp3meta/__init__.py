# Copyright (C) 2005  Michael Urman
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""mp3meta reads the tags and the first frame header of MPEG audio files.

::

    import mp3meta.mp3
    buffer = mp3meta.ByteBuffer.from_file("foo.mp3")
    f = mp3meta.mp3.MP3(buffer)
    f.tags.title, f.info.bitrate, f.id3v1

Nothing gets copied out of the buffer unless asked for; picture data is
handed out as a :class:`BufferView` which keeps the buffer alive.
"""

from mp3meta._util import BufferTooSmall, BufferView, ByteBuffer, MP3MetaError

version = (1, 0, 0)
"""Version tuple."""

version_string = ".".join(map(str, version))
"""Version string."""


def File(filename: str, **kwargs):
    """Load a file into a buffer and decode it, see :class:`mp3meta.mp3.MP3`
    """

    from mp3meta.mp3 import MP3
    return MP3.from_file(filename, **kwargs)


__all__ = ["ByteBuffer", "BufferView", "BufferTooSmall", "MP3MetaError",
           "File", "version", "version_string"]
