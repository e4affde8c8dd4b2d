"""
Tests for byte-stream line framing.

Run with:
    pytest tests/test_framing.py -v
"""

from pymbit import LineEnding, LineFramer


class TestLineEnding:

    def test_terminators(self):
        assert LineEnding.LF.terminator == b"\n"
        assert LineEnding.CR.terminator == b"\r"
        assert LineEnding.CRLF.terminator == b"\r\n"


class TestLineFramer:

    def test_single_line(self):
        framer = LineFramer()
        assert framer.feed(b"BA1\n") == ["BA1"]

    def test_multiple_lines_in_one_chunk(self):
        framer = LineFramer()
        assert framer.feed(b"BA1\nT:25\nV:100\n") == ["BA1", "T:25", "V:100"]

    def test_line_split_across_chunks(self):
        framer = LineFramer()
        assert framer.feed(b"F03E8") == []
        assert framer.pending == 5
        assert framer.feed(b"FFFF07D0\nT:") == ["F03E8FFFF07D0"]
        assert framer.feed(b"25\n") == ["T:25"]
        assert framer.pending == 0

    def test_empty_lines_skipped(self):
        framer = LineFramer()
        assert framer.feed(b"\n\nBA1\n  \n") == ["BA1"]

    def test_whitespace_stripped(self):
        framer = LineFramer()
        assert framer.feed(b"  T:25 \n") == ["T:25"]

    def test_crlf(self):
        framer = LineFramer(LineEnding.CRLF)
        assert framer.feed(b"BA1\r\nBB0\r\n") == ["BA1", "BB0"]

    def test_lf_mode_strips_trailing_cr(self):
        framer = LineFramer(LineEnding.LF)
        assert framer.feed(b"BA1\r\n") == ["BA1"]

    def test_cr(self):
        framer = LineFramer(LineEnding.CR)
        assert framer.feed(b"BA1\rBB1\r") == ["BA1", "BB1"]

    def test_non_ascii_line_dropped(self):
        framer = LineFramer()
        assert framer.feed(b"T:\xff\xfe\nBA1\n") == ["BA1"]

    def test_overlong_line_dropped(self):
        framer = LineFramer(max_line_length=8)
        assert framer.feed(b"F:03E8FFFF07D0\n") == []
        assert framer.feed(b"G:" + b"X" * 20 + b"\nBA1\n") == ["BA1"]

    def test_line_at_length_limit_kept(self):
        framer = LineFramer(max_line_length=8)
        assert framer.feed(b"G:Shake1\n") == ["G:Shake1"]

    def test_overflow_across_chunks(self):
        framer = LineFramer(max_line_length=8)
        assert framer.feed(b"F:03E8FF") == []
        assert framer.feed(b"FF07D0\nT:25\n") == ["T:25"]

    def test_crlf_split_between_chunks(self):
        framer = LineFramer(LineEnding.CRLF)
        assert framer.feed(b"BA1\r") == []
        assert framer.feed(b"\nBB1\r\n") == ["BA1", "BB1"]

    def test_crlf_keeps_lone_cr(self):
        framer = LineFramer(LineEnding.CRLF)
        assert framer.feed(b"G:A\rB\r\n") == ["G:A\rB"]

    def test_reset_drops_partial_line(self):
        framer = LineFramer()
        framer.feed(b"BA")
        framer.reset()
        assert framer.pending == 0
        assert framer.feed(b"T:1\n") == ["T:1"]
