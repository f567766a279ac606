import struct

from hypothesis import given, strategies as st

from mp3meta._util import ByteBuffer, BufferTooSmall
from mp3meta.mp3 import MP3, MPEGInfo, MPEGFrameHeader, find_frame_header, \
    HeaderNotFoundError, error as MP3Error, JOINTSTEREO, MONO, \
    BITRATES_MPEG1, BITRATES_MPEG2
from mp3meta.id3 import UTF16Mode
from tests import TestCase, MPEG_FRAME_HEADER, make_tag, make_frame, \
    make_text, make_id3v1


class TMPEGFrameHeader(TestCase):

    def test_fields(self):
        h = MPEGFrameHeader.from_bytes(MPEG_FRAME_HEADER)
        self.assertEqual(h.sync, 0x7FF)
        self.assertEqual(h.version, 3)
        self.assertEqual(h.layer, 1)
        self.assertEqual(h.protection, 1)
        self.assertEqual(h.bitrate_index, 9)
        self.assertEqual(h.frequency_index, 0)
        self.assertEqual(h.padding, 0)
        self.assertEqual(h.private, 0)
        self.assertEqual(h.mode, JOINTSTEREO)
        self.assertEqual(h.mode_extension, 0)
        self.assertEqual(h.copyright, 0)
        self.assertEqual(h.original, 1)
        self.assertEqual(h.emphasis, 0)

    def test_derived(self):
        h = MPEGFrameHeader.from_bytes(MPEG_FRAME_HEADER)
        self.assertTrue(h.is_valid())
        self.assertEqual(h.version_name, "MPEG 1")
        self.assertEqual(h.layer_number, 3)
        self.assertEqual(h.bitrate, 128000)
        self.assertEqual(h.sample_rate, 44100)
        self.assertEqual(h.mode_name, "Joint stereo")
        self.assertEqual(h.emphasis_name, "none")
        self.assertEqual(h.channels, 2)
        self.assertFalse(h.protected)

    def test_frame_size_layer3(self):
        h = MPEGFrameHeader.from_bytes(MPEG_FRAME_HEADER)
        self.assertEqual(h.frame_size, 417)

        padded = MPEGFrameHeader.from_bytes(b"\xff\xfb\x92\x44")
        self.assertEqual(padded.padding, 1)
        self.assertEqual(padded.frame_size, 418)

    def test_frame_size_layer1(self):
        # MPEG 1 layer I, 384 kbps, 44100 Hz
        h = MPEGFrameHeader.from_bytes(b"\xff\xff\xc0\x00")
        self.assertEqual(h.layer_number, 1)
        self.assertEqual(h.bitrate, 384000)
        self.assertEqual(h.frame_size, 416)

        padded = MPEGFrameHeader.from_bytes(b"\xff\xff\xc2\x00")
        self.assertEqual(padded.frame_size, 420)

    def test_mpeg2(self):
        h = MPEGFrameHeader.from_bytes(b"\xff\xf3\x80\xc0")
        self.assertTrue(h.is_valid())
        self.assertEqual(h.version_name, "MPEG 2")
        self.assertEqual(h.layer_number, 3)
        self.assertEqual(h.bitrate, 64000)
        self.assertEqual(h.sample_rate, 22050)
        self.assertEqual(h.mode, MONO)
        self.assertEqual(h.mode_name, "Mono")
        self.assertEqual(h.channels, 1)
        self.assertEqual(h.frame_size, 417)

    def test_mpeg25(self):
        h = MPEGFrameHeader.from_bytes(b"\xff\xe3\x80\x00")
        self.assertTrue(h.is_valid())
        self.assertEqual(h.version_name, "MPEG 2.5")
        self.assertEqual(h.sample_rate, 11025)
        self.assertEqual(h.bitrate, 64000)

    def test_mpeg2_layer1_bitrates(self):
        self.assertEqual(BITRATES_MPEG2[0][9], 144)
        self.assertEqual(BITRATES_MPEG1[0][14], 448)
        for table in (BITRATES_MPEG1, BITRATES_MPEG2):
            for row in table:
                self.assertEqual(len(row), 16)
                self.assertEqual(row[0], 0)
                self.assertEqual(row[15], 0)

    def test_flags(self):
        # protected, copyright, emphasis 50/15
        h = MPEGFrameHeader.from_bytes(b"\xff\xfa\x90\x09")
        self.assertTrue(h.protected)
        self.assertEqual(h.copyright, 1)
        self.assertEqual(h.original, 0)
        self.assertEqual(h.emphasis_name, "50/15 ms")

    def test_invalid(self):
        for data in [b"\xff\xeb\x90\x44",  # reserved version
                     b"\xff\xf9\x90\x44",  # reserved layer
                     b"\xff\xfb\xf0\x44",  # bad bitrate
                     b"\xff\xfb\x9c\x44",  # reserved sample rate
                     b"\x7f\xfb\x90\x44",  # no sync
                     b"\x00\x00\x00\x00"]:
            self.assertFalse(MPEGFrameHeader.from_bytes(data).is_valid(),
                             data)

    def test_decode_never_fails(self):
        for data in [b"\x00\x00\x00\x00", b"\xff\xff\xff\xff",
                     b"\xff\xeb\x9c\x44", b"\xff\xf9\xf0\x00"]:
            h = MPEGFrameHeader.from_bytes(data)
            h.version_name, h.mode_name, h.emphasis_name
            self.assertTrue(h.bitrate >= 0)
            self.assertTrue(h.frame_size >= 0)

    def test_reserved_sample_rate_frame_size(self):
        self.assertEqual(
            MPEGFrameHeader.from_bytes(b"\xff\xfb\x9c\x44").frame_size, 0)

    def test_free_format(self):
        h = MPEGFrameHeader.from_bytes(b"\xff\xfb\x00\x44")
        self.assertTrue(h.is_valid())
        self.assertEqual(h.bitrate, 0)

    def test_from_bytes_short(self):
        self.assertRaises(BufferTooSmall, MPEGFrameHeader.from_bytes, b"\xff")

    def test_eq(self):
        self.assertReallyEqual(MPEGFrameHeader(0xFFFB9044),
                               MPEGFrameHeader.from_bytes(MPEG_FRAME_HEADER))
        self.assertReallyNotEqual(MPEGFrameHeader(0xFFFB9044),
                                  MPEGFrameHeader(0xFFFB9244))

    def test_pprint(self):
        h = MPEGFrameHeader.from_bytes(MPEG_FRAME_HEADER)
        self.assertEqual(h.pprint(),
                         "MPEG 1 layer 3, 128000 bps, 44100 Hz, Joint stereo")
        self.assertEqual(repr(h), "<MPEGFrameHeader 0xFFFB9044>")

    @given(st.integers(0, 0xFFFFFFFF).filter(lambda v: v >> 21 != 0x7FF))
    def test_no_sync_never_valid(self, value):
        self.assertFalse(MPEGFrameHeader(value).is_valid())
        self.assertRaises(HeaderNotFoundError, find_frame_header,
                          struct.pack(">I", value))


class Tfind_frame_header(TestCase):

    def test_start(self):
        self.assertEqual(find_frame_header(MPEG_FRAME_HEADER + b"\x00"), 0)

    def test_offset(self):
        data = b"\x00" * 5 + MPEG_FRAME_HEADER
        self.assertEqual(find_frame_header(data), 5)
        self.assertEqual(find_frame_header(ByteBuffer(data)), 5)

    def test_last_position(self):
        self.assertEqual(find_frame_header(b"\x00" + MPEG_FRAME_HEADER), 1)

    def test_start_offset(self):
        data = MPEG_FRAME_HEADER + b"\x00" * 3 + MPEG_FRAME_HEADER
        self.assertEqual(find_frame_header(data, 1), 7)
        self.assertRaises(HeaderNotFoundError, find_frame_header, data, 8)

    def test_skips_invalid(self):
        data = b"\xff\xe0\x00\x00\xff\xfb\x9c\x44" + MPEG_FRAME_HEADER
        self.assertEqual(find_frame_header(data), 8)

    def test_overlapping_candidate(self):
        data = b"\xff" + MPEG_FRAME_HEADER
        self.assertEqual(find_frame_header(data), 1)

    def test_not_found(self):
        self.assertRaises(HeaderNotFoundError, find_frame_header, b"")
        self.assertRaises(HeaderNotFoundError, find_frame_header, b"\xff\xfb")
        self.assertRaises(HeaderNotFoundError, find_frame_header,
                          MPEG_FRAME_HEADER[:3])
        self.assertRaises(HeaderNotFoundError, find_frame_header,
                          b"\x00" * 1000)

    def test_error_hierarchy(self):
        self.assertTrue(issubclass(HeaderNotFoundError, MP3Error))
        self.assertTrue(issubclass(HeaderNotFoundError, ValueError))


class TMPEGInfo(TestCase):

    def test_basic(self):
        data = b"junk" + MPEG_FRAME_HEADER + b"\x00" * 413
        info = MPEGInfo(ByteBuffer(data))
        self.assertEqual(info.offset, 4)
        self.assertEqual(info.header, MPEGFrameHeader(0xFFFB9044))
        self.assertEqual(info.version, "MPEG 1")
        self.assertEqual(info.layer, 3)
        self.assertEqual(info.bitrate, 128000)
        self.assertEqual(info.sample_rate, 44100)
        self.assertEqual(info.mode, "Joint stereo")
        self.assertEqual(info.emphasis, "none")
        self.assertEqual(info.frame_size, 417)
        self.assertEqual(info.channels, 2)
        self.assertFalse(info.protected)
        self.assertFalse(info.padding)
        self.assertFalse(info.copyright)
        self.assertTrue(info.original)

    def test_offset(self):
        data = MPEG_FRAME_HEADER + b"\x00" * 10 + b"\xff\xf3\x80\xc0"
        self.assertEqual(MPEGInfo(data, offset=1).version, "MPEG 2")

    def test_empty(self):
        self.assertRaises(HeaderNotFoundError, MPEGInfo, b"")

    def test_pprint(self):
        text = MPEGInfo(MPEG_FRAME_HEADER).pprint()
        self.assertTrue("Version: MPEG 1" in text)
        self.assertTrue("Layer: 3" in text)
        self.assertTrue("Bitrate: 128000" in text)
        self.assertTrue("Frequency: 44100" in text)
        self.assertTrue("Mode: Joint stereo" in text)
        self.assertTrue("Emphasis: none" in text)
        self.assertTrue("Frame size: 417" in text)


class TMP3(TestCase):

    def setUp(self):
        frames = make_frame(b"TIT2", make_text("Title"))
        frames += make_frame(b"TPE1", make_text("Artist"))
        self.data = (make_tag(frames, padding=16) + MPEG_FRAME_HEADER +
                     b"\x00" * 413 +
                     make_id3v1(title=b"Old", artist=b"Someone", genre=17))

    def test_all(self):
        f = MP3(ByteBuffer(self.data))
        self.assertEqual(f.tags.title, "Title")
        self.assertEqual(f.tags.artist, "Artist")
        self.assertEqual(f.info.bitrate, 128000)
        self.assertEqual(f.info.offset, len(make_tag(
            make_frame(b"TIT2", make_text("Title")) +
            make_frame(b"TPE1", make_text("Artist")), padding=16)))
        self.assertEqual(f.id3v1.text("title"), "Old")
        self.assertEqual(f.id3v1.genre_name, "Rock")

    def test_accepts_bytes(self):
        f = MP3(self.data)
        self.assertTrue(isinstance(f.buffer, ByteBuffer))
        self.assertEqual(f.tags.title, "Title")

    def test_nothing(self):
        f = MP3(b"\x00" * 64)
        self.assertTrue(f.info is None)
        self.assertTrue(f.tags is None)
        self.assertTrue(f.id3v1 is None)
        self.assertEqual(f.pprint(), "No MPEG frame found")

    def test_options(self):
        frames = make_frame(b"TIT2", make_text(u"\xc4bc", encoding=1))
        data = make_tag(frames)
        self.assertEqual(MP3(data).tags.title, "bc")
        self.assertEqual(MP3(data, utf16=UTF16Mode.DECODE).tags.title,
                         u"\xc4bc")

    def test_pprint(self):
        text = MP3(self.data).pprint()
        self.assertTrue("Bitrate: 128000" in text)
        self.assertTrue("title=Title" in text)
        self.assertTrue("ID3v1 title=Old" in text)

    def test_anomalies_without_tag(self):
        data = MPEG_FRAME_HEADER + b"\x00" * 413 + make_tag() + b"\x00" * 4
        f = MP3(data)
        self.assertTrue(f.tags is None)
        self.assertEqual(f.anomalies, [417])
        self.assertTrue("ID3 signature ignored at offset 417" in f.pprint())

    def test_no_anomalies(self):
        f = MP3(self.data)
        self.assertEqual(f.anomalies, [])
        self.assertFalse("ignored" in f.pprint())

    def test_anomalies_scan_all(self):
        data = MPEG_FRAME_HEADER + b"\x00" * 413 + make_tag(
            make_frame(b"TIT2", make_text(u"Late")))
        f = MP3(data, scan_all=True)
        self.assertEqual(f.anomalies, [])
        self.assertEqual(f.tags.title, u"Late")
