# Copyright (C) 2005  Michael Urman
#               2006  Lukas Lalinsky
#               2013  Christoph Reiter
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""ID3v2 and ID3v1 reading.

This is based off of the following references:

* http://id3.org/id3v2.4.0-structure
* http://id3.org/id3v2.4.0-frames
* http://id3.org/id3v2.3.0
* http://id3.org/ID3v1

Only the frames needed for basic track metadata are decoded: TIT2, TPE1,
TALB, TYER/TDRC, TRCK, TCON and APIC. Unsynchronisation, extended headers
and ID3v2.2 are not supported.

You are probably interested in the :class:`ID3` class to start with.
"""

from ._file import ID3
from ._frames import APIC, TextFrame
from ._id3v1 import ID3v1Tag, find_id3v1
from ._specs import Encoding, PictureType, UTF16Mode, decode_text
from ._tags import Frame, ID3Header, iter_frames, scan_id3v2
from ._util import BitPaddedInt, ID3NoHeaderError, error

# support open(buffer) as interface
Open = ID3


__all__ = ['ID3', 'Open', 'APIC', 'TextFrame', 'ID3v1Tag', 'find_id3v1',
           'Encoding', 'PictureType', 'UTF16Mode', 'decode_text', 'Frame',
           'ID3Header', 'iter_frames', 'scan_id3v2', 'BitPaddedInt',
           'ID3NoHeaderError', 'error']
