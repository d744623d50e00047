STEP_UPLOAD = 'upload'
STEP_CONFIG = 'config'
STEP_EDITOR = 'editor'


class AppState:
    """Shared state container for the application."""

    def __init__(self):
        self.step = STEP_UPLOAD
        self.raw_data = []                          # Records as decoded, kept for the session
        self.columns = []                           # Confirmed ColumnConfig list
        self.data = []                              # Canonical (last saved) records

    def reset(self):
        self.__init__()
