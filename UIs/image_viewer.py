import threading
import tkinter as tk
from tkinter import ttk
import webbrowser

from PIL import ImageTk

from logics.image_loader import fetch_image, fit_size, ImageLoadError
from logics.image_resolver import (
    ImageResolver, STATE_EMPTY, STATE_PENDING, STATE_LOADED, STATE_EXHAUSTED,
)


class ImageViewer(tk.Frame):
    """
    Image pane bound to the designated url column.

    Each candidate from the resolver is fetched in a background thread; a
    failed fetch advances to the next candidate until one loads or the list
    is exhausted. Results for an older URL (the user moved to another
    record meanwhile) are dropped using the resolver's generation counter.

    Args:
        parent: Parent widget.
        root: Tk root, used to hand fetch results back to the main loop.
    """

    def __init__(self, parent, root):
        super().__init__(parent, bg="#212121")
        self._root = root
        self._resolver = ImageResolver()
        self._photo = None          # Keep a reference or Tk drops the image

        self._content = tk.Frame(self, bg="#212121")
        self._content.pack(fill='both', expand=True)
        self._render()

    def show(self, url):
        if self._resolver.set_url(url):
            self._render()
            self._load_current()

    # ── Loading ──────────────────────────────────────────────

    def _load_current(self):
        if self._resolver.state != STATE_PENDING:
            return
        generation = self._resolver.generation
        candidate = self._resolver.current
        size = self._target_size()

        def background():
            try:
                img = fetch_image(candidate)
                img.thumbnail(size)
                result, error = img, None
            except ImageLoadError as e:
                result, error = None, str(e)
            except Exception as e:
                result, error = None, f"Unexpected error: {e}"
            self._root.after(0, lambda: self._on_loaded(generation, result, error))

        print(f"[IMAGE] Trying candidate {self._resolver.index + 1}/{len(self._resolver.candidates)}: {candidate}")
        threading.Thread(target=background, daemon=True).start()

    def _on_loaded(self, generation, img, error):
        if not self.winfo_exists() or generation != self._resolver.generation:
            return
        if error is None:
            self._resolver.report_success()
            self._photo = ImageTk.PhotoImage(img)
        else:
            print(f"[IMAGE] {error}")
            self._resolver.report_failure()
        self._render()
        self._load_current()

    def _target_size(self):
        self.update_idletasks()
        return fit_size(self.winfo_width(), self.winfo_height())

    # ── States ───────────────────────────────────────────────

    def _render(self):
        for widget in self._content.winfo_children():
            widget.destroy()

        state = self._resolver.state
        if state == STATE_EMPTY:
            self._render_message(
                "🖼", "No image selected", "Select a record with a valid URL.",
                bg="#f5f5f5", fg="#9e9e9e",
            )
        elif state == STATE_PENDING:
            total = len(self._resolver.candidates)
            detail = "Loading image..."
            if total > 1:
                detail = f"Loading image... (source {self._resolver.index + 1} of {total})"
            self._render_message("⏳", detail, "", bg="#212121", fg="#bdbdbd")
        elif state == STATE_LOADED:
            self._render_image()
        elif state == STATE_EXHAUSTED:
            self._render_exhausted()

    def _render_message(self, icon, title, detail, *, bg, fg):
        self._content.config(bg=bg)
        box = tk.Frame(self._content, bg=bg)
        box.place(relx=0.5, rely=0.5, anchor='center')
        tk.Label(box, text=icon, bg=bg, fg=fg, font=("Arial", 48)).pack()
        tk.Label(box, text=title, bg=bg, fg=fg, font=("Arial", 14, "bold")).pack(pady=(10, 2))
        if detail:
            tk.Label(box, text=detail, bg=bg, fg=fg).pack()

    def _render_image(self):
        self._content.config(bg="#212121")
        ttk.Button(
            self._content, text="View full size",
            command=lambda url=self._resolver.current: webbrowser.open(url),
        ).pack(side='bottom', anchor='e', padx=10, pady=8)
        tk.Label(self._content, image=self._photo, bg="#212121").pack(fill='both', expand=True)

    def _render_exhausted(self):
        bg = "#fafafa"
        self._content.config(bg=bg)
        box = tk.Frame(self._content, bg=bg)
        box.place(relx=0.5, rely=0.5, anchor='center')

        tk.Label(box, text="⚠", bg=bg, fg="#e53935", font=("Arial", 48)).pack()
        tk.Label(box, text="Could not load the image", bg=bg, fg="#424242",
                 font=("Arial", 14, "bold")).pack(pady=(10, 4))
        tk.Label(
            box,
            text="The link seems broken, is not a direct image, or requires access permissions.",
            bg=bg, fg="#757575", wraplength=360,
        ).pack(pady=(0, 10))

        tk.Label(box, text="SOURCE URL:", bg=bg, fg="#9e9e9e", font=("Arial", 8, "bold")).pack(anchor='w')
        tk.Label(box, text=self._resolver.fallback_url, bg="white", fg="#616161",
                 font=("Courier", 9), wraplength=360, justify='left', bd=1, relief='solid').pack(fill='x')

        ttk.Button(
            box, text="Open original link ↗",
            command=lambda url=self._resolver.fallback_url: webbrowser.open(url),
        ).pack(pady=12)
