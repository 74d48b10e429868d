"""Cosmoscale application entry point."""

import sys


def main():
    """Launch the Cosmoscale application."""
    from PySide6.QtWidgets import QApplication, QMessageBox
    from PySide6.QtCore import Qt

    from cosmoscale.config.manager import ConfigManager
    from cosmoscale.core.logging import setup_logging
    from cosmoscale.core.journey import ScaleJourney
    from cosmoscale.ui.main_window import ScaleJourneyMainWindow

    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Cosmoscale")
    app.setOrganizationName("Cosmoscale")

    config = ConfigManager()
    config.load()
    setup_logging(config)

    try:
        journey = ScaleJourney.from_config(config)
    except (OSError, ValueError) as e:
        QMessageBox.critical(None, "Catalog Error", f"Could not load the catalog:\n\n{e}")
        sys.exit(1)

    window = ScaleJourneyMainWindow(config, journey)
    window.show()
    window.start()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
