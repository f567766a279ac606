import re
import codecs
import os
import sys
import struct
import contextlib
from io import StringIO
from tempfile import mkstemp
from unittest import TestCase as BaseTestCase

try:
    import pytest
except ImportError:
    raise SystemExit("pytest missing: sudo apt-get install python3-pytest")


# MPEG 1 layer III, 128 kbps, 44100 Hz, joint stereo, original
MPEG_FRAME_HEADER = b"\xff\xfb\x90\x44"


def synchsafe(value):
    """Returns `value` as a 4 byte synchsafe integer"""

    return bytes([(value >> 21) & 0x7F, (value >> 14) & 0x7F,
                  (value >> 7) & 0x7F, value & 0x7F])


def make_frame(frame_id, payload, v4=False, size=None):
    """Returns an ID3v2.3 (or 2.4 if v4) frame"""

    if size is None:
        size = len(payload)
    size_data = synchsafe(size) if v4 else struct.pack(">I", size)
    return frame_id + size_data + b"\x00\x00" + payload


def make_text(text, encoding=0):
    """Returns a text frame payload"""

    if encoding == 1:
        return b"\x01" + codecs.BOM_UTF16_LE + text.encode("utf-16-le")
    codec = ["latin-1", None, "utf-16-be", "utf-8"][encoding]
    return bytes([encoding]) + text.encode(codec)


def make_tag(frames=b"", major=3, size=None, padding=0):
    """Returns an ID3v2 tag containing the already encoded `frames`"""

    body = frames + b"\x00" * padding
    if size is None:
        size = len(body)
    return b"ID3" + bytes([major, 0, 0]) + synchsafe(size) + body


def make_id3v1(title=b"", artist=b"", album=b"", year=b"", comment=b"",
               genre=255, track=None):
    """Returns a 128 byte ID3v1 (or v1.1 if track is given) trailer"""

    if track is not None:
        comment = comment[:28].ljust(28, b"\x00") + b"\x00" + bytes([track])
    return (b"TAG" + title.ljust(30, b"\x00") + artist.ljust(30, b"\x00") +
            album.ljust(30, b"\x00") + year.ljust(4, b"\x00") +
            comment.ljust(30, b"\x00") + bytes([genre]))


def get_temp_file(data, ext=".mp3"):
    """Returns the name of a new file containing `data`"""

    fd, filename = mkstemp(suffix=ext)
    with os.fdopen(fd, "wb") as h:
        h.write(data)
    return filename


@contextlib.contextmanager
def capture_output():
    """
    with capture_output() as (stdout, stderr):
        some_action()
    print stdout.getvalue(), stderr.getvalue()
    """

    err = StringIO()
    out = StringIO()
    old_err = sys.stderr
    old_out = sys.stdout
    sys.stderr = err
    sys.stdout = out

    try:
        yield (out, err)
    finally:
        sys.stderr = old_err
        sys.stdout = old_out


class TestCase(BaseTestCase):

    def failUnlessRaisesRegexp(self, exc, re_, fun, *args, **kwargs):
        def wrapped(*args, **kwargs):
            try:
                fun(*args, **kwargs)
            except Exception as e:
                self.failUnless(re.search(re_, str(e)))
                raise
        self.failUnlessRaises(exc, wrapped, *args, **kwargs)

    # silence deprec warnings about useless renames
    failUnless = BaseTestCase.assertTrue
    failIf = BaseTestCase.assertFalse
    failUnlessEqual = BaseTestCase.assertEqual
    failUnlessRaises = BaseTestCase.assertRaises
    failIfEqual = BaseTestCase.assertNotEqual

    def assertReallyEqual(self, a, b):
        self.assertEqual(a, b)
        self.assertEqual(b, a)
        self.assertTrue(a == b)
        self.assertTrue(b == a)
        self.assertFalse(a != b)
        self.assertFalse(b != a)

    def assertReallyNotEqual(self, a, b):
        self.assertNotEqual(a, b)
        self.assertNotEqual(b, a)
        self.assertFalse(a == b)
        self.assertFalse(b == a)
        self.assertTrue(a != b)
        self.assertTrue(b != a)


def unit(run=[], exitfirst=False):
    args = []

    if run:
        args.append("-k")
        args.append(" or ".join(run))

    if exitfirst:
        args.append("-x")

    args.append("tests")

    return pytest.main(args=args)
