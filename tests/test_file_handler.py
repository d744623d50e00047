"""Tests for reading spreadsheets into records."""

import datetime as dt

import numpy as np
import pandas as pd
import pytest

from logics.file_handler import DecodeError, decode_file, frame_to_records, to_primitive


class TestDecodeFile:
    """Tests for decode_file."""

    def test_csv(self, tmp_path):
        path = tmp_path / "items.csv"
        path.write_text("name,qty,photo\nWidget,3,https://x.com/a.png\nGadget,,\n", encoding="utf-8")
        records = decode_file(str(path))
        assert records == [
            {"name": "Widget", "qty": 3, "photo": "https://x.com/a.png"},
            {"name": "Gadget", "qty": "", "photo": ""},
        ]
        assert list(records[0]) == ["name", "qty", "photo"]

    def test_csv_latin1(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes("nombre,foto\nCafé,\n".encode("latin-1"))
        records = decode_file(str(path))
        assert records[0]["nombre"] == "Café"

    def test_xlsx(self, tmp_path):
        path = tmp_path / "items.xlsx"
        pd.DataFrame({
            "name": ["Widget", "Gadget"],
            "price": [10.0, 2.5],
            "added": [pd.Timestamp("2024-03-01"), pd.NaT],
        }).to_excel(path, index=False)
        records = decode_file(str(path))
        assert records == [
            {"name": "Widget", "price": 10, "added": "2024-03-01"},
            {"name": "Gadget", "price": 2.5, "added": ""},
        ]

    def test_progress_callback(self, tmp_path):
        path = tmp_path / "items.csv"
        path.write_text("a\n1\n", encoding="utf-8")
        calls = []
        decode_file(str(path), progress_callback=lambda *args: calls.append(args))
        assert calls[-1] == (2, 2, "items.csv")

    def test_headers_only_is_empty(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("name,photo\n", encoding="utf-8")
        with pytest.raises(DecodeError, match="empty"):
            decode_file(str(path))

    def test_zero_byte_file(self, tmp_path):
        path = tmp_path / "blank.csv"
        path.write_bytes(b"")
        with pytest.raises(DecodeError):
            decode_file(str(path))

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello", encoding="utf-8")
        with pytest.raises(DecodeError, match="Unsupported"):
            decode_file(str(path))

    def test_corrupt_excel(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"this is not a workbook")
        with pytest.raises(DecodeError, match="broken.xlsx"):
            decode_file(str(path))


class TestToPrimitive:
    """Tests for cell normalisation."""

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (float("nan"), ""),
        (np.float64("nan"), ""),
        (pd.NaT, ""),
        (np.int64(5), 5),
        (np.float64(5.0), 5),
        (2.75, 2.75),
        ("text", "text"),
        (True, "TRUE"),
        (pd.Timestamp("2024-01-02"), "2024-01-02"),
        (pd.Timestamp("2024-01-02 13:45:00"), "2024-01-02 13:45:00"),
        (dt.date(2023, 5, 6), "2023-05-06"),
    ])
    def test_values(self, value, expected):
        result = to_primitive(value)
        assert result == expected
        assert type(result) is type(expected)

    def test_frame_to_records_drops_blank_rows(self):
        df = pd.DataFrame({"a": [1, None, 3], "b": ["x", None, None]})
        assert frame_to_records(df) == [{"a": 1, "b": "x"}, {"a": 3, "b": ""}]

    def test_frame_to_records_stringifies_headers(self):
        df = pd.DataFrame({2024: [1]})
        assert frame_to_records(df) == [{"2024": 1}]
