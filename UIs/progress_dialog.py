import tkinter as tk
from tkinter import ttk
import threading
import traceback


class ProgressDialog:
    """
    Modal dialog shown while a file is being decoded.

    The task runs in a daemon thread; its result (or exception) is handed
    back to the Tk main loop, so callers only ever touch widgets and app
    state from the main thread. The grab blocks a second decode from being
    started while one is outstanding, and there is no cancel button.

    Usage:
        ProgressDialog(root, "Loading file...", "Reading spreadsheet...").run(
            lambda progress_cb: decode_file(path, progress_callback=progress_cb),
            on_success=lambda records: ...,
            on_error=lambda exc: ...,
        )

    Args:
        root: Parent Tk window.
        title: Window title.
        heading: Bold line at the top of the dialog.
        label_prefix: Shown before the task's current label, e.g. "File: data.xlsx".
    """

    def __init__(self, root, title, heading, label_prefix="File"):
        self._root = root
        self._label_prefix = label_prefix

        win = tk.Toplevel(root)
        win.title(title)
        win.geometry("420x140")
        win.resizable(False, False)
        win.transient(root)
        win.grab_set()
        win.protocol("WM_DELETE_WINDOW", lambda: None)
        self._win = win

        body = ttk.Frame(win, padding=12)
        body.pack(fill='both', expand=True)
        tk.Label(body, text=heading, font=("Arial", 12, "bold")).pack(anchor='w')

        self._label = tk.Label(body, text="", fg="blue", anchor='w')
        self._label.pack(fill='x', pady=(8, 4))

        # Indeterminate until the task reports its first step
        self._bar = ttk.Progressbar(body, mode='indeterminate', length=380)
        self._bar.pack(fill='x')
        self._bar.start(12)

    def run(self, task, on_success, on_error):
        """
        Start task(progress_cb) in the background.

        on_success(result) or on_error(exception) is called on the main
        thread once the task returns or raises.
        """
        def report(current, total, label):
            self._root.after(0, lambda: self._show_progress(current, total, label))

        def worker():
            try:
                result = task(report)
            except Exception as e:
                failure = e
                print(f"[ERROR] {failure}")
                traceback.print_exc()
                self._root.after(0, lambda: self._close_then(on_error, failure))
                return
            self._root.after(0, lambda: self._close_then(on_success, result))

        threading.Thread(target=worker, daemon=True).start()

    def _show_progress(self, current, total, label):
        if not self._win.winfo_exists():
            return
        self._label.config(text=f"{self._label_prefix}: {label}")
        if total:
            if str(self._bar['mode']) == 'indeterminate':
                self._bar.stop()
                self._bar.config(mode='determinate', maximum=total)
            self._bar['value'] = current

    def _close_then(self, callback, payload):
        if self._win.winfo_exists():
            self._bar.stop()
            self._win.grab_release()
            self._win.destroy()
        callback(payload)
