import tkinter as tk
from tkinter import ttk

from logics.editor import display_text

from UIs.image_viewer import ImageViewer
from UIs.widgets import AutoResizingText, ScrollableFrame


# Text longer than this gets a full-width field
LONG_TEXT_CHARS = 70
IMAGE_REFRESH_MS = 500
EMPTY_PLACEHOLDER = "Empty"


class RecordEditorView:
    """Third screen – image on the left, one record's fields on the right."""

    def __init__(self, root, editor, *, on_back):
        self.root = root
        self.editor = editor
        self.on_back = on_back
        self._image_timer = None

        self._build_ui()
        self._bind_keys()
        self._show_record()

    # ── Main layout ──────────────────────────────────────────

    def _build_ui(self):
        header = ttk.Frame(self.root)
        header.pack(fill='x', padx=15, pady=10)

        ttk.Button(header, text="← Columns", command=self.on_back).pack(side='left')
        self._position_label = tk.Label(header, text="", font=("Arial", 12, "bold"))
        self._position_label.pack(side='left', padx=15)

        ttk.Button(header, text="Save progress", command=self._save).pack(side='right')
        self._error_label = tk.Label(header, text="", fg="#c62828", bg="#ffebee")
        self._error_label.pack(side='right', padx=10)

        panes = ttk.PanedWindow(self.root, orient='horizontal')
        panes.pack(fill='both', expand=True, padx=15, pady=(0, 10))

        # Left: image + navigation
        left = ttk.Frame(panes)
        self._viewer = ImageViewer(left, self.root)
        self._viewer.pack(fill='both', expand=True)

        nav = ttk.Frame(left)
        nav.pack(fill='x', pady=8)
        self._prev_btn = ttk.Button(nav, text="◀ Previous", command=self._go_previous)
        self._prev_btn.pack(side='left')
        tk.Label(nav, text="Use ← → to navigate", fg="gray").pack(side='left', expand=True)
        self._next_btn = ttk.Button(nav, text="Next ▶", command=self._go_next)
        self._next_btn.pack(side='right')
        panes.add(left, weight=1)

        # Right: form
        self._form = ScrollableFrame(panes)
        panes.add(self._form, weight=1)

    def _bind_keys(self):
        self.root.bind('<Left>', self._on_arrow)
        self.root.bind('<Right>', self._on_arrow)

    def _on_arrow(self, event):
        # Arrow keys keep their normal meaning while typing
        try:
            focused = self.root.focus_get()
        except KeyError:
            # Focus is inside a combobox drop-down
            return
        if isinstance(focused, (tk.Entry, ttk.Entry, tk.Text)):
            return
        if event.keysym == 'Left':
            self._go_previous()
        else:
            self._go_next()

    # ── Navigation ───────────────────────────────────────────

    def _go_next(self):
        if self.editor.go_next():
            self._show_record()

    def _go_previous(self):
        if self.editor.go_previous():
            self._show_record()

    def _show_record(self):
        self._position_label.config(text=self.editor.position_label())
        self._prev_btn.config(state='normal' if self.editor.current_index > 0 else 'disabled')
        last = len(self.editor) - 1
        self._next_btn.config(state='normal' if self.editor.current_index < last else 'disabled')
        self._show_error()
        self._viewer.show(self.editor.image_url())
        self._render_form()

    def _show_error(self, message=None):
        text = message or self.editor.validation_error
        self._error_label.config(text=f"⚠ {text}" if text else "")

    # ── Form ─────────────────────────────────────────────────

    def _render_form(self):
        body = self._form.body
        for widget in body.winfo_children():
            widget.destroy()
        body.columnconfigure(0, weight=1, uniform='field')
        body.columnconfigure(1, weight=1, uniform='field')

        row, col_pos = 0, 0
        for column in self.editor.columns:
            value = self.editor.value_for(column)
            full_width = column.data_type == 'url' or (
                column.data_type == 'text' and len(str(value)) > LONG_TEXT_CHARS
            )
            if full_width and col_pos == 1:
                row, col_pos = row + 1, 0

            cell = ttk.Frame(body)
            cell.grid(row=row, column=col_pos, columnspan=2 if full_width else 1,
                      sticky='new', padx=6, pady=6)
            tk.Label(cell, text=column.display_name, font=("Arial", 9, "bold"),
                     fg="#616161", anchor='w').pack(fill='x')
            self._field_widget(cell, column, value).pack(fill='x', pady=(2, 0))

            if full_width or col_pos == 1:
                row, col_pos = row + 1, 0
            else:
                col_pos = 1

        self._form.scroll_to_top()

    def _field_widget(self, parent, column, value):
        key = column.original_header

        if column.is_readonly:
            text = display_text(value)
            if text is None:
                return tk.Label(parent, text=EMPTY_PLACEHOLDER, anchor='w', bg="#eeeeee",
                                fg="#9e9e9e", font=("Arial", 9, "italic"), padx=6, pady=6)
            return tk.Label(parent, text=text, anchor='w', justify='left',
                            bg="#eeeeee", fg="#424242", padx=6, pady=6, wraplength=420)

        if column.data_type == 'select':
            combo = ttk.Combobox(parent, values=self.editor.choices_for(column, value), state='readonly')
            combo.set(str(value))
            combo.bind('<<ComboboxSelected>>', lambda _e, w=combo: self._write(key, w.get()))
            return combo

        if column.data_type in ('number', 'date'):
            entry = ttk.Entry(parent)
            entry.insert(0, str(value))
            if column.data_type == 'number':
                entry.bind('<KeyRelease>', lambda _e, w=entry: self._write_number(key, w, reset=False))
                entry.bind('<FocusOut>', lambda _e, w=entry: self._write_number(key, w))
                entry.bind('<Return>', lambda _e, w=entry: self._write_number(key, w))
            else:
                entry.bind('<KeyRelease>', lambda _e, w=entry: self._write(key, w.get()))
            return entry

        placeholder_lines = 2 if column.data_type == 'url' else 1
        return AutoResizingText(
            parent,
            value=str(value),
            on_change=lambda text, c=column: self._write_text(c, text),
            min_lines=placeholder_lines,
        )

    def _write(self, key, value):
        self.editor.set_field(self.editor.current_index, key, value)
        self._show_error()

    def _write_text(self, column, text):
        self._write(column.original_header, text)
        if column is self.editor.image_column:
            # Reload the image once typing pauses
            if self._image_timer is not None:
                self.root.after_cancel(self._image_timer)
            self._image_timer = self.root.after(IMAGE_REFRESH_MS, self._refresh_image)

    def _refresh_image(self):
        self._image_timer = None
        if self._viewer.winfo_exists():
            self._viewer.show(self.editor.image_url())

    def _write_number(self, key, entry, reset=True):
        if not entry.winfo_exists():
            return
        try:
            self._write(key, entry.get())
        except ValueError as e:
            self._show_error(str(e))
            if not reset:
                return
            entry.delete(0, tk.END)
            entry.insert(0, str(self.editor.current_record.get(key, '')))

    # ── Save ─────────────────────────────────────────────────

    def _save(self):
        issue = self.editor.commit()
        if issue is not None:
            self._show_record()
