import tkinter as tk
from tkinter import ttk, messagebox

from logics.schema import is_custom_column
from UIs.widgets import OptionList, ScrollableFrame


TYPE_LABELS = {
    'text': "Text",
    'number': "Number",
    'select': "Selector (list of options)",
    'date': "Date",
    'url': "URL (image)",
}
PERMISSION_LABELS = {
    'readwrite': "Read / write",
    'readonly': "Read only",
}


class ColumnSelection:
    """Second screen – configure name, type, permission and options per column."""

    def __init__(self, root, draft, *, on_confirm, on_back):
        self.root = root
        self.draft = draft
        self.on_confirm = on_confirm
        self.on_back = on_back

        self._build_ui()

    def _build_ui(self):
        header = ttk.Frame(self.root)
        header.pack(fill='x', padx=15, pady=10)

        ttk.Button(header, text="← Change file", command=self.on_back).pack(side='left')
        tk.Label(header, text="Configure columns", font=("Arial", 14, "bold")).pack(side='left', padx=15)
        tk.Label(
            header,
            text="Set how each column is shown and edited. Only one column can hold the main image.",
            fg="gray",
        ).pack(side='left')
        ttk.Button(header, text="Confirm and start ▶", command=self._confirm).pack(side='right')

        self._table = ScrollableFrame(self.root)
        self._table.pack(fill='both', expand=True, padx=15, pady=5)

        footer = ttk.Frame(self.root)
        footer.pack(fill='x', padx=15, pady=10)
        ttk.Button(footer, text="+ Add column", command=self._add_column).pack(side='left')
        self._count_label = tk.Label(footer, text="", fg="gray")
        self._count_label.pack(side='right')

        self._render_rows()

    # ── Table ────────────────────────────────────────────────

    def _render_rows(self):
        body = self._table.body
        for widget in body.winfo_children():
            widget.destroy()
        self._name_vars = []

        headings = ["Source column", "Display name", "Data type", "Permission", "Options", ""]
        for c, text in enumerate(headings):
            tk.Label(body, text=text, font=("Arial", 10, "bold"), anchor='w').grid(
                row=0, column=c, sticky='w', padx=6, pady=(0, 6),
            )
        body.columnconfigure(1, weight=1)
        body.columnconfigure(4, weight=1)

        for idx, col in enumerate(self.draft.columns):
            self._render_row(body, idx + 1, idx, col)

        self._count_label.config(text=f"{len(self.draft)} columns")

    def _render_row(self, body, row, idx, col):
        source = ttk.Frame(body)
        source.grid(row=row, column=0, sticky='nw', padx=6, pady=4)
        tk.Label(source, text="(new)" if is_custom_column(col) else col.original_header,
                 anchor='w').pack(anchor='w')
        if col.data_type == 'url':
            tk.Label(source, text="Main image", bg="#e8f5e9", fg="#2e7d32",
                     font=("Arial", 8, "bold")).pack(anchor='w')

        name_var = tk.StringVar(value=col.display_name)
        self._name_vars.append(name_var)
        name_var.trace_add('write', lambda *_a, i=idx, v=name_var: self.draft.set_field(i, 'display_name', v.get()))
        ttk.Entry(body, textvariable=name_var, width=28).grid(row=row, column=1, sticky='new', padx=6, pady=4)

        type_combo = ttk.Combobox(body, values=list(TYPE_LABELS.values()), state='readonly', width=24)
        type_combo.set(TYPE_LABELS[col.data_type])
        type_combo.bind('<<ComboboxSelected>>', lambda _e, i=idx, w=type_combo: self._change_type(i, w.get()))
        type_combo.grid(row=row, column=2, sticky='nw', padx=6, pady=4)

        perm_combo = ttk.Combobox(body, values=list(PERMISSION_LABELS.values()), state='readonly', width=14)
        perm_combo.set(PERMISSION_LABELS[col.permission])
        perm_combo.bind('<<ComboboxSelected>>', lambda _e, i=idx, w=perm_combo: self._change_permission(i, w.get()))
        perm_combo.grid(row=row, column=3, sticky='nw', padx=6, pady=4)

        if col.data_type == 'select':
            OptionList(
                body,
                options=col.options,
                on_add=lambda value, i=idx: self._add_option(i, value),
                on_remove=lambda j, i=idx: self._remove_option(i, j),
            ).grid(row=row, column=4, sticky='new', padx=6, pady=4)
        else:
            tk.Label(body, text="—", fg="gray").grid(row=row, column=4, sticky='nw', padx=6, pady=4)

        ttk.Button(body, text="Delete", command=lambda i=idx: self._delete_column(i)).grid(
            row=row, column=5, sticky='ne', padx=6, pady=4,
        )
        ttk.Separator(body).grid(row=row, column=0, columnspan=6, sticky='sew')

    # ── Draft edits ──────────────────────────────────────────

    def _change_type(self, idx, label):
        data_type = next(k for k, v in TYPE_LABELS.items() if v == label)
        self.draft.set_field(idx, 'data_type', data_type)
        self._render_rows()

    def _change_permission(self, idx, label):
        permission = next(k for k, v in PERMISSION_LABELS.items() if v == label)
        self.draft.set_field(idx, 'permission', permission)

    def _add_option(self, idx, value):
        if self.draft.add_option(idx, value):
            self._render_rows()

    def _remove_option(self, idx, option_idx):
        self.draft.remove_option(idx, option_idx)
        self._render_rows()

    def _add_column(self):
        self.draft.add_column()
        self._render_rows()

    def _delete_column(self, idx):
        # No confirmation: the draft is only validated when confirming
        self.draft.remove_column(idx)
        self._render_rows()

    def _confirm(self):
        issue = self.draft.validate()
        if issue is not None:
            messagebox.showerror("Error", issue.message)
            return
        self.on_confirm(self.draft.snapshot())
