# File: tests/test_wordlist.py
import pytest

from discover.errors import SourceUnavailable
from discover.wordlist import open_wordlist


def test_yields_trimmed_non_empty_lines_in_order(make_wordlist):
    path = make_wordlist("admin", "  login  ", "", "   ", "backup\t", "admin")
    with open_wordlist(path) as words:
        assert list(words) == ["admin", "login", "backup", "admin"]
        assert words.count == 4


def test_is_lazy_and_forward_only(make_wordlist):
    words = open_wordlist(make_wordlist("a", "b", "c"))
    assert next(words) == "a"
    assert not words.closed
    assert list(words) == ["b", "c"]
    assert words.closed
    # not restartable
    assert list(words) == []


def test_empty_file_yields_nothing(make_wordlist):
    words = open_wordlist(make_wordlist())
    assert list(words) == []
    assert words.closed


def test_windows_line_endings(tmp_path):
    path = tmp_path / "crlf.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    assert list(open_wordlist(path)) == ["one", "two"]


def test_undecodable_bytes_do_not_abort(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9\nok\n")
    words = list(open_wordlist(path))
    assert len(words) == 2
    assert words[1] == "ok"


def test_missing_file_raises_source_unavailable(tmp_path):
    with pytest.raises(SourceUnavailable) as exc_info:
        open_wordlist(tmp_path / "missing.txt")
    assert "missing.txt" in str(exc_info.value)


def test_directory_raises_source_unavailable(tmp_path):
    with pytest.raises(SourceUnavailable):
        open_wordlist(tmp_path)
