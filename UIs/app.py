from tkinter import messagebox

from logics.data_model import STEP_UPLOAD, STEP_CONFIG, STEP_EDITOR
from logics.file_handler import decode_file, DecodeError
from logics.workflow import WorkflowController

from UIs.data_input_wizard import DataInputWizard
from UIs.column_selection import ColumnSelection
from UIs.record_editor import RecordEditorView
from UIs.progress_dialog import ProgressDialog
from UIs.widgets import Toast


TOAST_MS = 3000


class RecordEditorApp:
    """Main application controller that manages navigation between views."""

    def __init__(self, root):
        self.root = root
        self.root.title("Record Editor - spreadsheet data with images")
        self.root.geometry("1280x860")

        self.workflow = WorkflowController()
        self._upload_view = None

        self.show_data_input_wizard()

    # ── Navigation ──────────────────────────────────────────

    def show(self):
        """Render the screen for the current workflow step."""
        step = self.workflow.step
        if step == STEP_UPLOAD:
            self.show_data_input_wizard()
        elif step == STEP_CONFIG:
            self.show_column_selection()
        elif step == STEP_EDITOR:
            self.show_record_editor()

    def show_data_input_wizard(self):
        self._clear_window()
        self._upload_view = DataInputWizard(self.root, on_file_selected=self._on_file_selected)

    def show_column_selection(self):
        self._clear_window()
        ColumnSelection(
            self.root,
            self.workflow.draft_columns(),
            on_confirm=self._on_schema_confirmed,
            on_back=self._on_back_to_upload,
        )

    def show_record_editor(self):
        self._clear_window()
        editor = self.workflow.open_editor(on_notify=self._notify)
        RecordEditorView(self.root, editor, on_back=self._on_back_to_config)

    # ── Logic callbacks ─────────────────────────────────────

    def _on_file_selected(self, path):
        """Decode the file in a background thread behind a modal progress dialog."""
        def on_success(records):
            try:
                self.workflow.load_records(records)
            except DecodeError as e:
                on_error(e)
                return
            messagebox.showinfo(
                "Success",
                f"Read {len(records)} records. Columns: {len(self.workflow.headers())}",
            )
            self.show()

        def on_error(error):
            if self._upload_view is not None:
                self._upload_view.set_busy(False)
                self._upload_view.show_error(str(error))
            title = "File read error" if isinstance(error, DecodeError) else "Error"
            messagebox.showerror(title, str(error))

        ProgressDialog(self.root, "Loading file...", "Reading spreadsheet...").run(
            lambda progress_cb: decode_file(path, progress_callback=progress_cb),
            on_success=on_success,
            on_error=on_error,
        )

    def _on_schema_confirmed(self, columns):
        issue = self.workflow.confirm_schema(columns)
        if issue is not None:
            messagebox.showerror("Error", issue.message)
            return
        self.show()

    def _on_back_to_upload(self):
        if self.workflow.back_to_upload(confirm=self._ask("Change file?")):
            self.show()

    def _on_back_to_config(self):
        if self.workflow.back_to_config(confirm=self._ask("Go back to columns?")):
            self.show()

    def _ask(self, title):
        return lambda message: messagebox.askyesno(title, message, icon='warning')

    def _notify(self, message):
        Toast(self.root, message, duration_ms=TOAST_MS)

    # ── Helpers ──────────────────────────────────────────────

    def _clear_window(self):
        self.root.unbind('<Left>')
        self.root.unbind('<Right>')
        self._upload_view = None
        for widget in self.root.winfo_children():
            widget.destroy()
