# Copyright (C) 2005  Michael Urman
#               2013  Christoph Reiter
#               2026  mp3meta contributors
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.

from __future__ import annotations

from mp3meta._util import MP3MetaError


class error(MP3MetaError):
    pass


class ID3NoHeaderError(error, ValueError):
    pass


class BitPaddedInt(int):
    """BitPaddedInt(value, bits=7)

    A big endian integer stored with `bits` bits per byte.

    ID3v2 uses 7 bit "synchsafe" integers for tag sizes and for frame
    sizes in v2.4. With bits=8 this is a plain big endian integer.

    The bytes are shifted by `bits` and combined with OR, without masking.
    A byte with its high bit set (which a valid synchsafe integer never
    has) still contributes all of its bits; use :meth:`has_valid_padding`
    to detect this.
    """

    bits: int

    def __new__(cls, value: bytes, bits: int = 7) -> BitPaddedInt:
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("value has to be bytes")

        numeric_value = 0
        for byte in value:
            numeric_value = (numeric_value << bits) | byte

        self = int.__new__(cls, numeric_value)
        self.bits = bits
        return self

    @staticmethod
    def has_valid_padding(value: bytes, bits: int = 7) -> bool:
        """Whether the padding bits are all zero"""

        assert bits <= 8

        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("value has to be bytes")

        mask = (((1 << (8 - bits)) - 1) << bits)
        for byte in value:
            if byte & mask:
                return False
        return True
