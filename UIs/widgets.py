import tkinter as tk
from tkinter import ttk


class OptionList(ttk.Frame):
    """
    Compact editor for the options of a 'select' column.

    Shows the current options as removable chips plus an entry to add a new
    one (Enter or the "+" button). The widget itself keeps no state: every
    change goes through the callbacks and the owner re-renders.

    Args:
        parent: Parent widget.
        options: Current option strings, in order.
        on_add: callable(value) for a new option.
        on_remove: callable(option_index).

    Example:
        OptionList(cell, options=col.options,
                   on_add=lambda v: draft.add_option(i, v),
                   on_remove=lambda j: draft.remove_option(i, j)).pack(fill='x')
    """

    def __init__(self, parent, *, options, on_add, on_remove, chips_per_row=3):
        super().__init__(parent)
        self._on_add = on_add
        self._on_remove = on_remove

        chips = ttk.Frame(self)
        chips.pack(fill='x')
        if not options:
            tk.Label(chips, text="No options yet", fg="red").grid(row=0, column=0, sticky='w')
        for idx, opt in enumerate(options):
            chip = tk.Frame(chips, bg="#e3f2fd", bd=1, relief='solid')
            chip.grid(row=idx // chips_per_row, column=idx % chips_per_row, padx=2, pady=2, sticky='w')
            tk.Label(chip, text=opt, bg="#e3f2fd").pack(side='left', padx=(4, 0))
            tk.Button(
                chip, text="×", bd=0, bg="#e3f2fd", fg="#c62828",
                command=lambda j=idx: self._on_remove(j),
            ).pack(side='left')

        add_row = ttk.Frame(self)
        add_row.pack(fill='x', pady=(2, 0))
        self._entry = ttk.Entry(add_row, width=18)
        self._entry.pack(side='left', fill='x', expand=True)
        self._entry.bind('<Return>', self._add)
        ttk.Button(add_row, text="+", width=3, command=self._add).pack(side='left', padx=(2, 0))

    def _add(self, _event=None):
        value = self._entry.get().strip()
        if value:
            self._on_add(value)


class AutoResizingText(tk.Text):
    """
    Text box that grows with its content instead of scrolling.

    Args:
        parent: Parent widget.
        value: Initial text.
        on_change: callable(text) after every edit.
        min_lines / max_lines: Height bounds in text lines.
    """

    def __init__(self, parent, *, value, on_change, min_lines=1, max_lines=12, **kwargs):
        super().__init__(parent, height=min_lines, wrap='word', undo=False, **kwargs)
        self._on_change = on_change
        self._min_lines = min_lines
        self._max_lines = max_lines
        self.insert('1.0', value)
        self.bind('<KeyRelease>', self._changed)
        self.bind('<Configure>', lambda _e: self._fit())
        # Tab moves focus instead of inserting a tab character
        self.bind('<Tab>', self._focus_next)
        self._fit()

    def get_value(self):
        return self.get('1.0', 'end-1c')

    def _changed(self, _event=None):
        self._fit()
        self._on_change(self.get_value())

    def _fit(self):
        lines = self.count('1.0', 'end', 'displaylines')
        n = lines[0] if isinstance(lines, tuple) else (lines or 1)
        self.configure(height=max(self._min_lines, min(self._max_lines, n)))

    def _focus_next(self, _event=None):
        self.tk_focusNext().focus()
        return 'break'


class ScrollableFrame(ttk.Frame):
    """Vertical scrolling container; put child widgets in `.body`."""

    def __init__(self, parent, **kwargs):
        super().__init__(parent, **kwargs)
        self._canvas = tk.Canvas(self, highlightthickness=0)
        scrollbar = ttk.Scrollbar(self, orient='vertical', command=self._canvas.yview)
        self._canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side='right', fill='y')
        self._canvas.pack(side='left', fill='both', expand=True)

        self.body = ttk.Frame(self._canvas)
        self._window = self._canvas.create_window((0, 0), window=self.body, anchor='nw')
        self.body.bind('<Configure>', lambda _e: self._canvas.configure(scrollregion=self._canvas.bbox('all')))
        self._canvas.bind('<Configure>', lambda e: self._canvas.itemconfigure(self._window, width=e.width))

    def scroll_to_top(self):
        self._canvas.yview_moveto(0)


class Toast:
    """
    Auto-dismissing notification in the top-right corner of the window.

    Args:
        root: Parent Tk window.
        message: Text to show.
        duration_ms: Time before the toast disappears.
    """

    def __init__(self, root, message, duration_ms=3000):
        self._win = tk.Toplevel(root)
        self._win.overrideredirect(True)
        self._win.attributes('-topmost', True)

        frame = tk.Frame(self._win, bg="#2e7d32", padx=16, pady=10)
        frame.pack()
        tk.Label(frame, text="✓  " + message, bg="#2e7d32", fg="white",
                 font=("Arial", 11, "bold")).pack()

        root.update_idletasks()
        self._win.update_idletasks()
        x = root.winfo_rootx() + root.winfo_width() - self._win.winfo_reqwidth() - 24
        y = root.winfo_rooty() + 24
        self._win.geometry(f"+{x}+{y}")

        self._win.after(duration_ms, self.dismiss)

    def dismiss(self):
        if self._win.winfo_exists():
            self._win.destroy()
