"""Tests for the record editor working copy."""

import pytest

from logics.editor import RecordEditor, coerce_value, display_text
from logics.schema import ColumnConfig


def make_editor(records, columns, published=None, notices=None):
    return RecordEditor(
        records,
        columns,
        on_publish=(published.append if published is not None else lambda data: None),
        on_notify=(notices.append if notices is not None else None),
    )


class TestNavigation:
    """Tests for cursor movement."""

    def test_previous_at_start_is_noop(self, records, columns):
        editor = make_editor(records, columns)
        assert not editor.go_previous()
        assert editor.current_index == 0

    def test_next_at_end_is_noop(self, records, columns):
        editor = make_editor(records, columns)
        while editor.go_next():
            pass
        assert not editor.go_next()
        assert editor.current_index == len(records) - 1

    def test_next_and_previous(self, records, columns):
        editor = make_editor(records, columns)
        assert editor.go_next()
        assert editor.go_next()
        assert editor.current_index == 2
        assert editor.go_previous()
        assert editor.current_index == 1

    def test_position_label(self, records, columns):
        editor = make_editor(records, columns)
        editor.go_next()
        assert editor.position_label() == "Record 2 of 4"


class TestSetField:
    """Tests for field writes."""

    def test_write_updates_working_copy_only(self, records, columns):
        editor = make_editor(records, columns)
        assert editor.set_field(1, "photo", "https://example.com/new.png")
        assert editor.working_data[1]["photo"] == "https://example.com/new.png"
        assert records[1]["photo"] == "https://example.com/gadget.png"

    def test_readonly_write_refused(self, records, columns):
        editor = make_editor(records, columns)
        before = [dict(r) for r in editor.working_data]
        assert not editor.set_field(0, "name", "Changed")
        assert editor.working_data == before

    def test_unknown_column_refused(self, records, columns):
        editor = make_editor(records, columns)
        assert not editor.set_field(0, "nope", "x")
        assert "nope" not in editor.working_data[0]

    @pytest.mark.parametrize("index", [-1, 4, 99])
    def test_out_of_range_record_refused(self, records, columns, index):
        editor = make_editor(records, columns)
        before = [dict(r) for r in editor.working_data]
        assert not editor.set_field(index, "price", "7")
        assert editor.working_data == before

    def test_write_to_added_column(self, records, columns):
        columns = columns + [ColumnConfig("custom_col_1", "Notes")]
        editor = make_editor(records, columns)
        assert editor.value_for(columns[-1]) == ""
        editor.set_field(0, "custom_col_1", "checked")
        assert editor.working_data[0]["custom_col_1"] == "checked"

    def test_write_clears_validation_error(self, records, columns):
        records[2]["photo"] = "not-a-url"
        editor = make_editor(records, columns)
        editor.commit()
        assert editor.validation_error
        editor.set_field(2, "status", "ok")
        assert editor.validation_error is None

    def test_number_coercion(self, records, columns):
        editor = make_editor(records, columns)
        editor.set_field(0, "price", "42")
        assert editor.working_data[0]["price"] == 42
        editor.set_field(0, "price", "4.25")
        assert editor.working_data[0]["price"] == 4.25
        editor.set_field(0, "price", "")
        assert editor.working_data[0]["price"] == ""

    def test_invalid_number_raises_and_keeps_value(self, records, columns):
        editor = make_editor(records, columns)
        with pytest.raises(ValueError):
            editor.set_field(0, "price", "ten")
        assert editor.working_data[0]["price"] == 10

    def test_select_accepts_out_of_set_value(self, records, columns):
        editor = make_editor(records, columns)
        editor.set_field(0, "status", "unknown")
        assert editor.working_data[0]["status"] == "unknown"


class TestCoerceValue:
    """Tests for coerce_value."""

    @pytest.mark.parametrize("raw,expected", [
        ("", ""),
        ("  ", ""),
        (None, ""),
        ("7", 7),
        ("-3", -3),
        ("2.0", 2),
        ("0.5", 0.5),
        ("+4", 4),
        (" 12 ", 12),
        ("1.5e3", 1500),
        (".25", 0.25),
        (3.5, 3.5),
    ])
    def test_number(self, raw, expected):
        col = ColumnConfig("n", data_type="number")
        result = coerce_value(col, raw)
        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize("raw", ["abc", "nan", "inf", "1,5", "1_000", "\u0661\u0662", "1e400", "0x10"])
    def test_number_rejects(self, raw):
        with pytest.raises(ValueError):
            coerce_value(ColumnConfig("n", data_type="number"), raw)

    @pytest.mark.parametrize("data_type", ["text", "date", "url", "select"])
    def test_raw_string_types(self, data_type):
        col = ColumnConfig("c", data_type=data_type)
        assert coerce_value(col, "2024-01-31") == "2024-01-31"
        assert coerce_value(col, None) == ""


class TestChoices:
    """Tests for select choices."""

    def test_choices_include_blank_and_options(self, records, columns):
        editor = make_editor(records, columns)
        assert editor.choices_for(columns[3], "ok") == ["", "ok", "broken"]

    def test_out_of_set_value_is_tolerated(self, records, columns):
        editor = make_editor(records, columns)
        assert editor.choices_for(columns[3], "legacy") == ["", "ok", "broken", "legacy"]


class TestImageUrl:
    """Tests for the designated image column."""

    def test_image_url_follows_cursor(self, records, columns):
        editor = make_editor(records, columns)
        assert editor.image_url() == "https://drive.google.com/file/d/XYZ/view"
        for _ in range(3):
            editor.go_next()
        assert editor.image_url() == ""

    def test_no_image_column(self, records):
        editor = make_editor(records, [ColumnConfig("name")])
        assert editor.image_column is None
        assert editor.image_url() == ""


class TestValidateAndCommit:
    """Tests for save-time validation and commit."""

    def test_invalid_url_reported(self, records, columns):
        records[2]["photo"] = "not-a-url"
        editor = make_editor(records, columns)
        issue = editor.validate_all()
        assert issue.record_index == 2
        assert issue.column.display_name == "Photo"

    def test_corrected_url_passes(self, records, columns):
        records[2]["photo"] = "not-a-url"
        editor = make_editor(records, columns)
        editor.set_field(2, "photo", "https://x.com/a.png")
        assert editor.validate_all() is None

    @pytest.mark.parametrize("value", ["ftp://x.com/a.png", "https://x.com/a b.png", 'http://x.com/"a"', 123])
    def test_invalid_values(self, records, columns, value):
        records[0]["photo"] = value
        assert make_editor(records, columns).validate_all().record_index == 0

    def test_first_violation_wins(self, records, columns):
        records[1]["photo"] = "bad one"
        records[3]["photo"] = "bad two"
        assert make_editor(records, columns).validate_all().record_index == 1

    def test_empty_values_are_valid(self, records, columns):
        records[0]["photo"] = ""
        del records[1]["photo"]
        assert make_editor(records, columns).validate_all() is None

    def test_commit_failure_moves_cursor(self, records, columns):
        records[2]["photo"] = "not-a-url"
        published, notices = [], []
        editor = make_editor(records, columns, published, notices)
        issue = editor.commit()
        assert issue.record_index == 2
        assert editor.current_index == 2
        assert "#3" in editor.validation_error
        assert "Photo" in editor.validation_error
        assert published == []
        assert notices == []

    def test_commit_success_publishes_copy(self, records, columns):
        published, notices = [], []
        editor = make_editor(records, columns, published, notices)
        editor.set_field(1, "price", "99")
        assert editor.commit() is None
        assert len(published) == 1
        assert published[0][1]["price"] == 99
        assert published[0] is not editor.working_data
        assert len(notices) == 1


class TestDisplayText:
    """Tests for read-only field text."""

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_values_have_no_text(self, value):
        assert display_text(value) is None

    @pytest.mark.parametrize("value,expected", [("Widget", "Widget"), (0, "0"), (2.5, "2.5")])
    def test_values_are_stringified(self, value, expected):
        assert display_text(value) == expected
