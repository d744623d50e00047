import math
import re


URL_PATTERN = re.compile(r'^(http|https)://[^ "]+$')
# Plain decimal notation only; no underscores, no non-ASCII digits
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$", re.ASCII)


class FieldIssue:
    """First invalid field found when validating the working copy."""

    def __init__(self, record_index, column, message):
        self.record_index = record_index
        self.column = column
        self.message = message

    def __repr__(self):
        return f"FieldIssue({self.record_index}, {self.column.original_header!r})"


def coerce_value(column, value):
    """
    Convert user input to the value stored for a column.

    number: "" stays "", otherwise int or float; raises ValueError for
    non-numeric text. Every other type stores the raw string.
    """
    if column.data_type == 'number':
        if value is None or (isinstance(value, str) and value.strip() == ''):
            return ''
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        text = str(value).strip()
        if not NUMBER_PATTERN.match(text):
            raise ValueError(f"'{value}' is not a number ({column.display_name}).")
        try:
            return int(text)
        except ValueError:
            pass
        number = float(text)
        if not math.isfinite(number):
            raise ValueError(f"'{value}' is not a number ({column.display_name}).")
        return int(number) if number.is_integer() else number
    return '' if value is None else str(value)


def display_text(value):
    """Text for a read-only field, or None when the value is blank."""
    text = '' if value is None else str(value)
    return text if text.strip() else None


class RecordEditor:
    """
    Working copy of the dataset plus a cursor, for one editing session.

    Nothing reaches the canonical dataset until commit() succeeds; the
    on_publish callback receives the validated copy.

    Args:
        data: Canonical records (copied, never mutated).
        columns: Confirmed ColumnConfig list.
        on_publish: callable(records) invoked by a successful commit.
        on_notify: Optional callable(message) for the transient success notice.
    """

    def __init__(self, data, columns, *, on_publish, on_notify=None):
        self.working_data = [dict(r) for r in data]
        self.columns = list(columns)
        self.current_index = 0
        self.validation_error = None
        self._on_publish = on_publish
        self._on_notify = on_notify
        self._by_key = {c.original_header: c for c in self.columns}

    # ── Navigation ──────────────────────────────────────────

    def __len__(self):
        return len(self.working_data)

    @property
    def current_record(self):
        if not self.working_data:
            return {}
        return self.working_data[self.current_index]

    def go_next(self):
        if self.current_index < len(self.working_data) - 1:
            self.current_index += 1
            return True
        return False

    def go_previous(self):
        if self.current_index > 0:
            self.current_index -= 1
            return True
        return False

    def position_label(self):
        return f"Record {self.current_index + 1} of {len(self.working_data)}"

    # ── Fields ──────────────────────────────────────────────

    @property
    def image_column(self):
        return next((c for c in self.columns if c.data_type == 'url'), None)

    def image_url(self):
        col = self.image_column
        if col is None:
            return ''
        value = self.current_record.get(col.original_header, '')
        return '' if value is None else str(value)

    def value_for(self, column, record_index=None):
        index = self.current_index if record_index is None else record_index
        value = self.working_data[index].get(column.original_header, '')
        return '' if value is None else value

    def choices_for(self, column, value):
        """Select choices: "no selection", the options, and an out-of-set stored value."""
        choices = [''] + list(column.options or [])
        if value not in ('', None) and str(value) not in choices:
            choices.append(str(value))
        return choices

    def set_field(self, record_index, column_key, value):
        """
        Store a new value for one field of the working copy.

        Returns False (and changes nothing) for unknown or read-only columns,
        and for a record index outside the dataset.

        Raises:
            ValueError: value cannot be coerced to the column's type.
        """
        if not 0 <= record_index < len(self.working_data):
            print(f"[EDITOR] Ignoring write to missing record {record_index}")
            return False
        column = self._by_key.get(column_key)
        if column is None:
            print(f"[EDITOR] Ignoring write to unknown column '{column_key}'")
            return False
        if column.is_readonly:
            print(f"[EDITOR] Refusing write to read-only column '{column.display_name}'")
            return False

        stored = coerce_value(column, value)
        record = dict(self.working_data[record_index])
        record[column_key] = stored
        self.working_data[record_index] = record
        self.validation_error = None
        return True

    # ── Save ────────────────────────────────────────────────

    def validate_all(self):
        """
        Scan every record for malformed URLs in the url columns.

        Returns:
            None if the data can be saved, else the FieldIssue for the first
            bad value (record order, then column order).
        """
        url_columns = [c for c in self.columns if c.data_type == 'url']
        for i, row in enumerate(self.working_data):
            for col in url_columns:
                val = row.get(col.original_header)
                text = '' if val is None else str(val)
                if text.strip() != '' and not URL_PATTERN.match(text):
                    return FieldIssue(
                        i, col,
                        f"Error in record #{i + 1}: column \"{col.display_name}\" contains an invalid URL.",
                    )
        return None

    def commit(self):
        issue = self.validate_all()
        if issue is not None:
            self.validation_error = issue.message
            self.current_index = issue.record_index
            print(f"[EDITOR] Save blocked: {issue.message}")
            return issue

        self._on_publish([dict(r) for r in self.working_data])
        print(f"[EDITOR] Saved {len(self.working_data)} records")
        if self._on_notify:
            self._on_notify("Changes saved successfully")
        return None
