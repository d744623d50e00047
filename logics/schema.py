import itertools


DATA_TYPES = ('text', 'number', 'select', 'date', 'url')
PERMISSIONS = ('readonly', 'readwrite')

# Header fragments that mark a column as holding the record's image link
URL_KEYWORDS = ('image', 'imagen', 'foto', 'photo', 'url', 'link')

CUSTOM_PREFIX = 'custom_col_'
NEW_COLUMN_NAME = 'New column'

_custom_counter = itertools.count(1)


class ColumnConfig:
    """User-defined interpretation of one column."""

    def __init__(self, original_header, display_name=None, data_type='text',
                 permission='readwrite', options=None):
        self.original_header = original_header
        self.display_name = original_header if display_name is None else display_name
        self.data_type = data_type
        self.permission = permission
        self.options = list(options) if options is not None else []

    @property
    def is_readonly(self):
        return self.permission == 'readonly'

    def copy(self):
        return ColumnConfig(
            self.original_header,
            self.display_name,
            self.data_type,
            self.permission,
            self.options,
        )

    def __eq__(self, other):
        if not isinstance(other, ColumnConfig):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return (f"ColumnConfig({self.original_header!r}, display_name={self.display_name!r}, "
                f"data_type={self.data_type!r}, permission={self.permission!r})")


class SchemaIssue:
    """
    First invariant violated by a column list.

    Attributes:
        rule: 'too_many_urls', 'select_without_options' or 'no_columns'.
        message: Text ready to show to the user.
        column: Offending ColumnConfig (select rule only).
        count: Number of url columns (url rule only).
    """

    def __init__(self, rule, message, column=None, count=None):
        self.rule = rule
        self.message = message
        self.column = column
        self.count = count

    def __repr__(self):
        return f"SchemaIssue({self.rule!r}, {self.message!r})"


def is_custom_column(column):
    return column.original_header.startswith(CUSTOM_PREFIX)


def looks_like_url_header(header):
    lowered = str(header).lower()
    return any(k in lowered for k in URL_KEYWORDS)


def derive_initial_schema(headers):
    """
    Build the starting column configuration from the decoded headers.

    Headers whose name suggests an image link become 'url' columns, but only
    the first one keeps that type; later matches fall back to 'text' so the
    draft starts with a single image column.

    Args:
        headers: Ordered column keys of the dataset.

    Returns:
        list of ColumnConfig, one per header, in header order.
    """
    columns = []
    url_seen = False
    for header in headers:
        data_type = 'text'
        if looks_like_url_header(header):
            if url_seen:
                print(f"[SCHEMA] '{header}' looks like an image column; keeping it as text")
            else:
                data_type = 'url'
                url_seen = True
        columns.append(ColumnConfig(header, data_type=data_type))
    return columns


def validate_for_confirmation(columns):
    """
    Check the schema invariants on a snapshot of the draft.

    Returns:
        None when the columns can be confirmed, otherwise the SchemaIssue for
        the first violated rule (url count, then select options, then emptiness).
    """
    url_columns = [c for c in columns if c.data_type == 'url']
    if len(url_columns) > 1:
        return SchemaIssue(
            'too_many_urls',
            f"{len(url_columns)} columns are configured as 'URL'. "
            "Select only one column holding the main image.",
            count=len(url_columns),
        )

    for col in columns:
        if col.data_type == 'select' and not col.options:
            return SchemaIssue(
                'select_without_options',
                f"Column \"{col.display_name}\" is a selector but has no options defined.",
                column=col,
            )

    if not columns:
        return SchemaIssue('no_columns', "At least one column must be configured.")

    return None


class SchemaDraft:
    """
    Editable column list shown on the configuration screen.

    Mutations never repair invariant violations; validate() runs the
    confirmation checks on the current state.
    """

    FIELDS = ('display_name', 'data_type', 'permission')

    def __init__(self, columns, reserved=()):
        self.columns = [c.copy() for c in columns]
        self._reserved = set(reserved)       # Dataset keys a new column must not reuse

    def __len__(self):
        return len(self.columns)

    def __getitem__(self, index):
        return self.columns[index]

    def set_field(self, index, field, value):
        if field not in self.FIELDS:
            raise ValueError(f"Unknown column field: {field}")
        if field == 'data_type' and value not in DATA_TYPES:
            raise ValueError(f"Unknown data type: {value}")
        if field == 'permission' and value not in PERMISSIONS:
            raise ValueError(f"Unknown permission: {value}")

        col = self.columns[index]
        setattr(col, field, value)
        if field == 'data_type' and value == 'select' and col.options is None:
            col.options = []

    def add_option(self, index, value):
        """Append an option to a column; blank and duplicate values are ignored."""
        value = str(value).strip()
        if not value:
            return False
        col = self.columns[index]
        if col.options is None:
            col.options = []
        if value in col.options:
            return False
        col.options.append(value)
        return True

    def remove_option(self, index, option_index):
        col = self.columns[index]
        if col.options and 0 <= option_index < len(col.options):
            del col.options[option_index]

    def add_column(self):
        existing = {c.original_header for c in self.columns} | self._reserved
        header = f"{CUSTOM_PREFIX}{next(_custom_counter)}"
        while header in existing:
            header = f"{CUSTOM_PREFIX}{next(_custom_counter)}"

        col = ColumnConfig(header, display_name=NEW_COLUMN_NAME)
        self.columns.append(col)
        return col

    def remove_column(self, index):
        return self.columns.pop(index)

    def validate(self):
        return validate_for_confirmation(self.snapshot())

    def snapshot(self):
        return [c.copy() for c in self.columns]
