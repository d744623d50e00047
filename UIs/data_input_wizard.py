import tkinter as tk
from tkinter import ttk, filedialog


class DataInputWizard:
    """First screen – pick the spreadsheet to work on."""

    def __init__(self, root, *, on_file_selected):
        self.root = root
        self.on_file_selected = on_file_selected

        self._build_ui()

    def _build_ui(self):
        frame = ttk.Frame(self.root)
        frame.pack(pady=40, padx=40, fill='both', expand=True)

        tk.Label(frame, text="Record Editor", font=("Arial", 24, "bold")).pack(pady=(40, 5))
        tk.Label(
            frame,
            text="View and edit spreadsheet data alongside its images.",
            font=("Arial", 12),
            fg="gray",
        ).pack(pady=(0, 30))

        drop = tk.Frame(frame, bd=3, relief='groove', padx=60, pady=40)
        drop.pack()
        tk.Label(drop, text="Choose your Excel or CSV file", font=("Arial", 14, "bold")).pack(pady=5)
        tk.Label(drop, text=".xlsx, .xls or .csv", fg="gray").pack()
        self._browse_btn = ttk.Button(drop, text="Browse...", command=self._browse)
        self._browse_btn.pack(pady=15)

        self._path_label = tk.Label(frame, text="No file selected", fg="gray")
        self._path_label.pack(pady=10)

        self._error_label = tk.Label(frame, text="", fg="#c62828", wraplength=600, justify='left')
        self._error_label.pack(pady=10)

    def _browse(self):
        path = filedialog.askopenfilename(
            filetypes=[("Excel/CSV files", "*.xlsx *.xls *.csv")],
        )
        if path:
            self._path_label.config(text=path, fg="green")
            self.show_error(None)
            self.set_busy(True)
            self.on_file_selected(path)

    def set_busy(self, busy):
        if self._browse_btn.winfo_exists():
            self._browse_btn.config(state='disabled' if busy else 'normal')

    def show_error(self, message):
        if self._error_label.winfo_exists():
            self._error_label.config(text=f"⚠ {message}" if message else "")
