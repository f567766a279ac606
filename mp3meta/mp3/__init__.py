# Copyright (C) 2006  Joe Wreschnig
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

"""MPEG audio frame header decoding and the MP3 file facade.

This code was implemented based on the format documentation at
http://mpgedit.org/mpgedit/mpeg_format/mpeghdr.htm.
"""

from __future__ import annotations

import logging

from mp3meta._util import BufferTooSmall, ByteBuffer, MP3MetaError, cdata

__all__ = ["MP3", "MPEGInfo", "MPEGFrameHeader", "find_frame_header",
           "HeaderNotFoundError", "Open"]

logger = logging.getLogger(__name__)


class error(MP3MetaError):
    pass


class HeaderNotFoundError(error, ValueError):
    pass


# Mode values.
STEREO, JOINTSTEREO, DUALCHANNEL, MONO = range(4)

# Bitrates in kbps, indexed by [layer_number - 1][bitrate_index]. Index 0
# is "free format", index 15 is invalid; both resolve to 0.
BITRATES_MPEG1 = (
    (0, 32, 64, 96, 128, 160, 192, 224, 256, 288, 320, 352, 384, 416, 448, 0),
    (0, 32, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 384, 0),
    (0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 0),
)

BITRATES_MPEG2 = (
    (0, 32, 48, 56, 64, 80, 96, 112, 128, 144, 160, 176, 192, 224, 256, 0),
    (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0),
    (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0),
)

# Sample rates in Hz, indexed by the raw version bits.
FREQUENCIES = (
    (11025, 12000, 8000, 0),  # MPEG 2.5
    (0, 0, 0, 0),  # reserved
    (22050, 24000, 16000, 0),  # MPEG 2
    (44100, 48000, 32000, 0),  # MPEG 1
)

VERSIONS = ("MPEG 2.5", "Reserved", "MPEG 2", "MPEG 1")

CHANNEL_MODES = ("Stereo", "Joint stereo", "Dual Mono", "Mono")

EMPHASIS = ("none", "50/15 ms", "Reserved", "CCIT J.17")


class MPEGFrameHeader:
    """MPEGFrameHeader(value)

    A decoded 32 bit MPEG audio frame header.

    Decoding never fails, any 32 bit value gives a header object. Use
    :meth:`is_valid` to check if the value can be an audio frame.

    Arguments:
        value (int): the header as a big endian 32 bit integer

    Attributes:
        sync (int): 11 frame sync bits, 0x7FF for a real frame
        version (int): raw version bits (0: 2.5, 1: reserved, 2: 2, 3: 1)
        layer (int): raw layer bits (1: III, 2: II, 3: I, 0: reserved)
        protection (int): 0 if a CRC follows the header
        bitrate_index (int)
        frequency_index (int)
        padding (int)
        private (int)
        mode (int): one of STEREO, JOINTSTEREO, DUALCHANNEL or MONO
        mode_extension (int)
        copyright (int)
        original (int)
        emphasis (int)
    """

    def __init__(self, value: int):
        self.value = value & 0xFFFFFFFF
        v = self.value
        self.sync = (v >> 21) & 0x7FF
        self.version = (v >> 19) & 0x3
        self.layer = (v >> 17) & 0x3
        self.protection = (v >> 16) & 0x1
        self.bitrate_index = (v >> 12) & 0xF
        self.frequency_index = (v >> 10) & 0x3
        self.padding = (v >> 9) & 0x1
        self.private = (v >> 8) & 0x1
        self.mode = (v >> 6) & 0x3
        self.mode_extension = (v >> 4) & 0x3
        self.copyright = (v >> 3) & 0x1
        self.original = (v >> 2) & 0x1
        self.emphasis = v & 0x3

    @classmethod
    def from_bytes(cls, data: bytes) -> MPEGFrameHeader:
        """Decode the first four bytes of `data`"""

        if len(data) < 4:
            raise BufferTooSmall("MPEG frame header needs 4 bytes")
        return cls(cdata.uint32_be(data[:4]))

    def is_valid(self) -> bool:
        return not (self.sync != 0x7FF or self.version == 1 or
                    self.layer == 0 or self.bitrate_index == 0xF or
                    self.frequency_index == 3)

    @property
    def version_name(self) -> str:
        return VERSIONS[self.version]

    @property
    def layer_number(self) -> int:
        """1, 2 or 3; 4 for the reserved layer value"""

        return 4 - self.layer

    @property
    def bitrate(self) -> int:
        """Bitrate in bits per second, 0 if free format or invalid"""

        if self.layer == 0:
            return 0
        table = BITRATES_MPEG1 if self.version == 3 else BITRATES_MPEG2
        return table[self.layer_number - 1][self.bitrate_index] * 1000

    @property
    def sample_rate(self) -> int:
        """Sample rate in Hz, 0 if reserved"""

        return FREQUENCIES[self.version][self.frequency_index]

    @property
    def mode_name(self) -> str:
        return CHANNEL_MODES[self.mode]

    @property
    def emphasis_name(self) -> str:
        return EMPHASIS[self.emphasis]

    @property
    def channels(self) -> int:
        return 1 if self.mode == MONO else 2

    @property
    def protected(self) -> bool:
        # the bit is set if there is *no* CRC
        return not self.protection

    @property
    def frame_size(self) -> int:
        """The size of the whole frame in bytes, including the header.

        0 if the sample rate is unknown.
        """

        sample_rate = self.sample_rate
        if not sample_rate:
            return 0
        if self.layer_number == 1:
            return ((12 * self.bitrate // sample_rate) + self.padding) * 4
        return (144 * self.bitrate // sample_rate) + self.padding

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MPEGFrameHeader):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return "<%s 0x%08X>" % (type(self).__name__, self.value)

    def pprint(self) -> str:
        return "%s layer %d, %d bps, %s Hz, %s" % (
            self.version_name, self.layer_number, self.bitrate,
            self.sample_rate, self.mode_name)


def find_frame_header(buffer: ByteBuffer | bytes, start: int = 0) -> int:
    """Returns the offset of the first valid MPEG frame header at or after
    `start`.

    Only the header itself is checked, there is no verification that a
    second frame follows, so random data can give false positives.

    Raises HeaderNotFoundError if there is none.
    """

    data = bytes(ByteBuffer.wrap(buffer))
    # the last offset that still holds four bytes is len - 4
    limit = max(len(data) - 3, 0)
    # all valid headers start with 0xFF
    pos = data.find(b"\xff", max(start, 0), limit)
    while pos != -1:
        if MPEGFrameHeader.from_bytes(data[pos:pos + 4]).is_valid():
            return pos
        pos = data.find(b"\xff", pos + 1, limit)
    raise HeaderNotFoundError("can't sync to an MPEG frame")


class MPEGInfo:
    """MPEGInfo(buffer, offset=0)

    Parameters of the first MPEG audio frame in a buffer.

    Arguments:
        buffer (ByteBuffer): the file content
        offset (int): where to start searching for a frame header

    Raises HeaderNotFoundError if no frame header can be found.

    Attributes:
        offset (int): position of the frame header in the buffer
        header (MPEGFrameHeader): the decoded header
        version (str): e.g. "MPEG 1"
        layer (int): 1, 2 or 3
        bitrate (int): audio bitrate, in bits per second
        sample_rate (int): audio sample rate, in Hz
        mode (str): channel mode name
        emphasis (str): emphasis name
        frame_size (int): size of the first frame in bytes
        channels (int): number of audio channels
        protected (bool): whether a CRC follows the header
        padding (bool)
        copyright (bool)
        original (bool)
    """

    def __init__(self, buffer: ByteBuffer | bytes, offset: int = 0):
        buffer = ByteBuffer.wrap(buffer)
        try:
            self.offset = find_frame_header(buffer, offset)
        except HeaderNotFoundError:
            logger.debug("no MPEG frame header after offset %d", offset)
            raise

        header = MPEGFrameHeader.from_bytes(buffer.read(self.offset, 4))
        self.header = header
        self.version = header.version_name
        self.layer = header.layer_number
        self.bitrate = header.bitrate
        self.sample_rate = header.sample_rate
        self.mode = header.mode_name
        self.emphasis = header.emphasis_name
        self.frame_size = header.frame_size
        self.channels = header.channels
        self.protected = header.protected
        self.padding = bool(header.padding)
        self.copyright = bool(header.copyright)
        self.original = bool(header.original)

    def pprint(self) -> str:
        return "\n".join([
            "Version: %s" % self.version,
            "Layer: %d" % self.layer,
            "Protected: %d" % self.protected,
            "Bitrate: %d" % self.bitrate,
            "Frequency: %d" % self.sample_rate,
            "Padding: %d" % self.padding,
            "Mode: %s" % self.mode,
            "Copyright: %d" % self.copyright,
            "Original: %d" % self.original,
            "Emphasis: %s" % self.emphasis,
            "Frame size: %d" % self.frame_size,
        ])


class MP3:
    """MP3(buffer, scan_all=False, utf16=UTF16Mode.ASCII_SUBSET)

    Everything mp3meta can decode from one MPEG audio file.

    Each part is decoded independently, so a missing or broken part
    doesn't affect the others.

    Arguments:
        buffer (ByteBuffer): the file content
        scan_all (bool): passed to :class:`mp3meta.id3.ID3`
        utf16 (UTF16Mode): passed to :class:`mp3meta.id3.ID3`

    Attributes:
        info (MPEGInfo): the first audio frame or `None`
        tags (ID3): ID3v2 metadata or `None` if there is no ID3v2 tag
        id3v1 (ID3v1Tag): the ID3v1 trailer or `None`
        anomalies (list[int]): offsets of "ID3" signatures not read as tags
    """

    def __init__(self, buffer: ByteBuffer | bytes, **kwargs):
        from mp3meta.id3 import ID3, find_id3v1

        self.buffer = buffer = ByteBuffer.wrap(buffer)

        try:
            self.info: MPEGInfo | None = MPEGInfo(buffer)
        except HeaderNotFoundError:
            self.info = None

        tags = ID3(buffer, **kwargs)
        self.tags = tags if tags.tags else None
        self.anomalies = tags.anomalies
        self.id3v1 = find_id3v1(buffer)

    @classmethod
    def from_file(cls, filename: str, **kwargs) -> MP3:
        return cls(ByteBuffer.from_file(filename), **kwargs)

    def pprint(self) -> str:
        parts = []
        if self.info is not None:
            parts.append(self.info.pprint())
        else:
            parts.append("No MPEG frame found")
        if self.tags is not None:
            parts.append(self.tags.pprint())
        if self.id3v1 is not None:
            parts.append(self.id3v1.pprint())
        for offset in self.anomalies:
            parts.append("ID3 signature ignored at offset %d" % offset)
        return "\n".join(parts)


Open = MP3.from_file
