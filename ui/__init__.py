"""
UI module for AniType
Contains all Qt widgets and UI components
"""

from .log_widget import LogWidget
from .control_panel import ControlPanel
from .main_window import AniTypeViewer

__all__ = [
    'LogWidget',
    'ControlPanel',
    'AniTypeViewer',
]
