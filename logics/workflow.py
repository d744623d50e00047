from logics.data_model import AppState, STEP_UPLOAD, STEP_CONFIG, STEP_EDITOR
from logics.editor import RecordEditor
from logics.file_handler import DecodeError
from logics.schema import derive_initial_schema, validate_for_confirmation, SchemaDraft


BACK_TO_CONFIG_PROMPT = (
    "If you go back to the column configuration without saving, the changes made "
    "in this editing session may be lost.\n\nTip: use \"Save progress\" before leaving."
)
BACK_TO_UPLOAD_PROMPT = (
    "If you go back to the upload screen, the current data and column "
    "configuration will be lost and you will have to start again."
)


class WorkflowError(Exception):
    """An operation was requested in a step that does not allow it."""


class WorkflowController:
    """
    Owns the AppState and moves it through upload -> config -> editor.

    Forward moves are driven by data (decode result, confirmed schema).
    Backward moves go through a confirm(message) -> bool callable so the
    caller can ask the user first; a declined confirmation changes nothing.
    """

    def __init__(self, state=None):
        self.state = state or AppState()

    @property
    def step(self):
        return self.state.step

    def _require(self, *steps):
        if self.state.step not in steps:
            raise WorkflowError(
                f"Not allowed in step '{self.state.step}' (expected {' / '.join(steps)})"
            )

    # ── Forward ─────────────────────────────────────────────

    def load_records(self, records):
        self._require(STEP_UPLOAD)
        records = list(records)
        if not records:
            raise DecodeError("The file appears to be empty.")

        self.state.raw_data = records
        self.state.data = [dict(r) for r in records]
        self.state.columns = []
        self.state.step = STEP_CONFIG
        print(f"[WORKFLOW] upload -> config ({len(records)} records, {len(self.headers())} columns)")

    def headers(self):
        """Column keys in first-seen order across all decoded records."""
        seen = {}
        for record in self.state.raw_data:
            for key in record:
                seen.setdefault(key, None)
        return list(seen)

    def draft_columns(self):
        self._require(STEP_CONFIG)
        if self.state.columns:
            columns = self.state.columns
        else:
            columns = derive_initial_schema(self.headers())
        return SchemaDraft(columns, reserved=self.headers())

    def confirm_schema(self, columns):
        self._require(STEP_CONFIG)
        snapshot = [c.copy() for c in columns]
        issue = validate_for_confirmation(snapshot)
        if issue is not None:
            print(f"[WORKFLOW] Schema rejected: {issue.rule}")
            return issue

        self.state.columns = snapshot
        self.state.step = STEP_EDITOR
        print(f"[WORKFLOW] config -> editor ({len(snapshot)} columns)")
        return None

    def open_editor(self, on_notify=None):
        self._require(STEP_EDITOR)
        return RecordEditor(
            self.state.data,
            self.state.columns,
            on_publish=self.save,
            on_notify=on_notify,
        )

    def save(self, records):
        self._require(STEP_EDITOR)
        self.state.data = [dict(r) for r in records]

    # ── Backward ────────────────────────────────────────────

    def back_to_config(self, confirm):
        self._require(STEP_EDITOR)
        if not confirm(BACK_TO_CONFIG_PROMPT):
            return False
        self.state.step = STEP_CONFIG
        print("[WORKFLOW] editor -> config")
        return True

    def back_to_upload(self, confirm):
        self._require(STEP_CONFIG, STEP_EDITOR)
        if not confirm(BACK_TO_UPLOAD_PROMPT):
            return False
        self.state.reset()
        print("[WORKFLOW] reset -> upload")
        return True
