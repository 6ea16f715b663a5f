"""
Log Widget
Displays engine and loader messages with color-coded severity levels
"""

import html
from datetime import datetime

from PyQt6.QtWidgets import QTextEdit

MAX_LOG_LINES = 500


class LogWidget(QTextEdit):
    """Read-only log pane fed through ``log(message, level)``"""

    COLORS = {
        "INFO": "black",
        "WARNING": "orange",
        "ERROR": "red",
        "SUCCESS": "green",
    }

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setMaximumHeight(150)
        self.setUndoRedoEnabled(False)
        # Oldest lines drop off once the cap is reached
        self.document().setMaximumBlockCount(MAX_LOG_LINES)

    def log(self, message: str, level: str = "INFO"):
        """
        Add a log message

        Args:
            message: Message to log, shown as plain text
            level: Severity level (INFO, WARNING, ERROR, SUCCESS)
        """
        color = self.COLORS.get(level, "black")
        stamp = datetime.now().strftime("%H:%M:%S")
        self.append(
            f'<span style="color: {color};">{stamp} [{level}] {html.escape(message)}</span>'
        )
        self.verticalScrollBar().setValue(self.verticalScrollBar().maximum())
