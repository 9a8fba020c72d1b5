"""Tests for IDF file loading and saving."""

import pytest

from idf_tools import load_board, load_idf, load_library, save_idf
from idf_tools.exceptions import FileFormatError, FileNotFoundError, GrammarError
from idf_tools.idf30 import decode, encode


class TestLoad:
    """Tests for load_idf, load_board and load_library."""

    def test_load_idf(self, board_file, sample_board):
        assert load_idf(board_file) == decode(sample_board)

    def test_load_accepts_str(self, board_file):
        assert load_idf(str(board_file)).header.board_name == "sample_board"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError) as exc:
            load_idf(tmp_path / "missing.emn")
        assert "missing.emn" in exc.value.context["file"]

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "bad.emn"
        path.write_text(".HEADER\n", encoding="utf-8")
        with pytest.raises(GrammarError):
            load_idf(path)

    def test_load_board(self, board_file):
        assert len(load_board(board_file).placements) == 4

    def test_load_board_accepts_panel(self, tmp_path, sample_panel):
        path = tmp_path / "panel.emn"
        path.write_text(sample_panel, encoding="utf-8")
        assert load_board(path).header.file_type_token == "PANEL_FILE"

    def test_load_board_rejects_library(self, library_file):
        with pytest.raises(FileFormatError, match="Not an IDF board file"):
            load_board(library_file)

    def test_load_library(self, library_file):
        assert len(load_library(library_file).components) == 2

    def test_load_library_rejects_board(self, board_file):
        with pytest.raises(FileFormatError) as exc:
            load_library(board_file)
        assert exc.value.context["got"] == "BOARD_FILE"


class TestSave:
    """Tests for save_idf."""

    def test_save(self, tmp_path, sample_board):
        doc = decode(sample_board)
        path = tmp_path / "out.emn"
        save_idf(doc, path)
        assert path.read_text(encoding="utf-8") == encode(doc)

    def test_save_then_load(self, tmp_path, library_file):
        doc = load_library(library_file)
        doc.header.source = "PCB: Sample File Generator"
        path = tmp_path / "out.emp"
        save_idf(doc, path)
        assert load_library(path) == doc

    def test_non_ascii_text(self, tmp_path, make_board):
        path = tmp_path / "utf8.emn"
        text = make_board('Gehäuse "Widerstand 10kΩ" R1\n0 0 0 0 TOP PLACED\n')
        path.write_text(text, encoding="utf-8")
        doc = load_board(path)
        save_idf(doc, path)
        assert load_board(path).placements[0].part_number == "Widerstand 10kΩ"


class TestEncoding:
    """Tests for files that are not plain UTF-8."""

    def test_byte_order_mark(self, tmp_path, sample_board):
        path = tmp_path / "bom.emn"
        path.write_bytes(b"\xef\xbb\xbf" + sample_board.encode("utf-8"))
        assert load_idf(path) == decode(sample_board)

    def test_latin1_file(self, tmp_path, make_board):
        path = tmp_path / "latin1.emn"
        data = make_board('pkg "25\xb0C" R1\n0 0 0 0 TOP PLACED\n').encode("latin-1")
        path.write_bytes(data)
        with pytest.raises(FileFormatError, match="not valid UTF-8") as exc:
            load_idf(path)
        assert exc.value.context["file"] == str(path)
        assert exc.value.context["byte"] == data.index(b"\xb0")
        assert isinstance(exc.value.__cause__, UnicodeDecodeError)
