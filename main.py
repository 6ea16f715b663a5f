"""
AniType
Main entry point for the application

Composites per-letter clips into animated text, with live preview and
frame export.
"""

import sys
from PyQt6.QtWidgets import QApplication
from ui.main_window import AniTypeViewer


def main():
    """Main entry point"""
    app = QApplication(sys.argv)
    app.setStyle('Fusion')

    window = AniTypeViewer()
    window.show()

    sys.exit(app.exec())


if __name__ == '__main__':
    main()
