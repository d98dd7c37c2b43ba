"""
Tests for sudoview Log Source Module
"""

import os

import pytest

from sudoview.errors import SourceNotFoundError, SourceReadError, StartupError
from sudoview.log_source import LogLine, load_log, strip_terminator

from conftest import AUTH_LOG_LINES


class TestStripTerminator:
    """Tests for line terminator handling."""

    def test_strips_newline(self):
        assert strip_terminator("abc\n") == "abc"

    def test_keeps_other_whitespace(self):
        assert strip_terminator("  abc \t\n") == "  abc \t"

    def test_no_terminator(self):
        assert strip_terminator("abc") == "abc"

    def test_strips_crlf(self):
        assert strip_terminator("abc\r\n") == "abc"

    def test_keeps_inner_carriage_return(self):
        assert strip_terminator("a\rb\n") == "a\rb"
        assert strip_terminator("a\rb") == "a\rb"


class TestLoadLog:
    """Tests for load_log."""

    def test_preserves_order_and_text(self, auth_log_file):
        """Lines come back in file order, verbatim."""
        lines = load_log(auth_log_file)

        assert [line.text for line in lines] == AUTH_LOG_LINES
        assert [line.index for line in lines] == list(range(len(AUTH_LOG_LINES)))

    def test_accepts_string_path(self, auth_log_file):
        lines = load_log(str(auth_log_file))
        assert len(lines) == len(AUTH_LOG_LINES)

    def test_crlf_terminators(self, temp_directory):
        """Windows line endings are treated as terminators."""
        path = temp_directory / "crlf.log"
        path.write_bytes(b"first\r\nsecond\r\n")

        assert [line.text for line in load_log(path)] == ["first", "second"]

    def test_bare_carriage_return_is_not_a_line_break(self, temp_directory):
        """A lone \\r is line content; indexes after it do not shift."""
        path = temp_directory / "cr.log"
        path.write_bytes(b"host sudo: bob : COMMAND=/bin/echo a\rb\nnext\n")

        lines = load_log(path)
        assert [line.text for line in lines] == ["host sudo: bob : COMMAND=/bin/echo a\rb", "next"]
        assert lines[1].index == 1

    def test_last_line_without_newline(self, temp_directory):
        path = temp_directory / "partial.log"
        path.write_text("one\ntwo")

        assert load_log(path) == [LogLine(0, "one"), LogLine(1, "two")]

    def test_empty_file(self, temp_directory):
        path = temp_directory / "empty.log"
        path.write_text("")

        assert load_log(path) == []

    def test_blank_lines_kept(self, temp_directory):
        path = temp_directory / "blank.log"
        path.write_text("a\n\nb\n")

        assert [line.text for line in load_log(path)] == ["a", "", "b"]

    def test_invalid_utf8_replaced(self, temp_directory):
        """Undecodable bytes do not abort loading."""
        path = temp_directory / "binary.log"
        path.write_bytes(b"ok\n\xff\xfe sudo: x\n")

        lines = load_log(path)
        assert len(lines) == 2
        assert lines[1].text.endswith(" sudo: x")

    def test_missing_file(self, temp_directory):
        """Missing file is a startup error."""
        with pytest.raises(SourceNotFoundError) as exc_info:
            load_log(temp_directory / "nope.log")

        assert isinstance(exc_info.value, StartupError)
        assert isinstance(exc_info.value, FileNotFoundError)
        assert "nope.log" in str(exc_info.value)

    def test_directory_is_read_error(self, temp_directory):
        with pytest.raises(SourceReadError):
            load_log(temp_directory)

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="root can read any file",
    )
    def test_unreadable_file(self, auth_log_file):
        auth_log_file.chmod(0)
        try:
            with pytest.raises(SourceReadError):
                load_log(auth_log_file)
        finally:
            auth_log_file.chmod(0o644)

    def test_log_line_to_dict(self):
        assert LogLine(3, "text").to_dict() == {"index": 3, "text": "text"}
