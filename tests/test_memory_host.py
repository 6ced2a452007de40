"""
Tests for the in-memory editor host.
"""

import pytest

pytestmark = pytest.mark.fast

from wrapping.exceptions import HostError, KeymapNotFoundError
from wrapping.filetypes import detect_filetype
from wrapping.host.memory import InMemoryHost


class TestBuffers:

    def test_buffer_inherits_global_textwidth(self):
        host = InMemoryHost(textwidth=79)
        buffer = host.add_buffer(["text"])
        assert host.get_buffer_option(buffer, "textwidth") == 79
        assert host.current_buffer() == buffer

    def test_open_file(self, host, tmp_path):
        path = tmp_path / "note.txt"
        path.write_text("one\ntwo\n")
        buffer = host.open_file(path, filetype="text")
        assert host.line_count(buffer) == 2
        assert host.get_lines(buffer, 0, 2) == ["one", "two"]
        assert host.file_size(buffer) == 8

    def test_open_missing_file(self, host, tmp_path):
        with pytest.raises(HostError):
            host.open_file(tmp_path / "missing.txt")

    def test_size_of_unbacked_buffer(self, host):
        buffer = host.add_buffer(["ab", "c"])
        assert host.file_size(buffer) == 5

    def test_get_lines_out_of_bounds(self, host):
        buffer = host.add_buffer(["a", "b"])
        with pytest.raises(HostError):
            host.get_lines(buffer, 1, 3)

    def test_wiped_buffer_is_invalid(self, host):
        buffer = host.add_buffer(["a"])
        host.wipe_buffer(buffer)
        with pytest.raises(HostError, match="invalid buffer"):
            host.get_buffer_option(buffer, "textwidth")

    def test_no_current_buffer(self):
        with pytest.raises(HostError):
            InMemoryHost().current_buffer()


class TestKeymapsAndViews:

    def test_del_missing_keymap_raises(self, host):
        buffer = host.add_buffer(["a"])
        with pytest.raises(KeymapNotFoundError):
            host.del_keymap(buffer, "n", "<Up>")

    def test_count_matching_lines_moves_cursor(self, host):
        buffer = host.add_buffer(["a", "", "b", " "])
        assert host.count_matching_lines(buffer, r"^\s*$") == 2
        assert host.get_cursor(buffer) == (3, 0)

    def test_save_restore_view(self, host):
        buffer = host.add_buffer(["a", "b", "c"])
        host.set_cursor(buffer, 1, 0)
        view = host.save_view(buffer)
        host.set_cursor(buffer, 2, 0)
        host.restore_view(buffer, view)
        assert host.get_cursor(buffer) == (1, 0)


@pytest.mark.parametrize("name,filetype", [
    ("README.md", "markdown"),
    ("paper.tex", "tex"),
    ("COMMIT_EDITMSG", "gitcommit"),
    ("main.py", "python"),
    ("data.bin", ""),
])
def test_detect_filetype(tmp_path, name, filetype):
    assert detect_filetype(tmp_path / name) == filetype
