"""Main application window for Cosmoscale.

Hosts the scale viewport as the central widget and reports the current
camera distance and the nearest catalog object in the status bar.
"""

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QLabel, QMainWindow, QMessageBox, QStatusBar

from cosmoscale.version import __version_display__
from cosmoscale.config.manager import ConfigManager
from cosmoscale.core.journey import Frame, ScaleJourney


class ScaleJourneyMainWindow(QMainWindow):
    """Primary application window."""

    def __init__(self, config: ConfigManager, journey: ScaleJourney):
        super().__init__()
        self._config = config
        self._journey = journey

        self.setMinimumSize(960, 600)
        self.setWindowTitle(__version_display__)

        self._build_viewport()
        self._build_menu_bar()
        self._build_status_bar()

    def _build_viewport(self):
        from cosmoscale.ui.panels.scale_viewport import ScaleViewportPanel

        self._viewport = ScaleViewportPanel(self._journey, self._config)
        self._viewport.gl_widget.frame_advanced.connect(self._on_frame)
        self.setCentralWidget(self._viewport)

    def _build_menu_bar(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self._action("E&xit", "Ctrl+Q", self.close))

        view_menu = menu_bar.addMenu("&View")
        view_menu.addAction(self._action("&Reset Journey", "Home", self._reset_journey))
        self._labels_action = QAction("Show &Labels", self)
        self._labels_action.setShortcut(QKeySequence("L"))
        self._labels_action.setCheckable(True)
        self._labels_action.setChecked(self._config.get("appearance", "show_labels", True))
        self._labels_action.toggled.connect(self._toggle_labels)
        view_menu.addAction(self._labels_action)
        view_menu.addSeparator()
        view_menu.addAction(self._action("&Full Screen", "F11", self._toggle_full_screen))

        help_menu = menu_bar.addMenu("&Help")
        help_menu.addAction(self._action("&About Cosmoscale", callback=self._show_about))

    def _build_status_bar(self):
        status = QStatusBar()
        self.setStatusBar(status)
        self._status_label = QLabel("Scroll or pinch to travel")
        status.addWidget(self._status_label)

        self._nearest_label = QLabel("")
        status.addPermanentWidget(self._nearest_label)

        self._distance_label = QLabel("Distance: ...")
        status.addPermanentWidget(self._distance_label)

    def _action(self, text: str, shortcut: str = None, callback=None) -> QAction:
        """Helper to create a QAction."""
        action = QAction(text, self)
        if shortcut:
            action.setShortcut(QKeySequence(shortcut))
        if callback:
            action.triggered.connect(callback)
        return action

    def start(self):
        """Start the frame loop."""
        self._viewport.gl_widget.start()

    def _on_frame(self, frame: Frame):
        distance_text = f"Distance: {frame.distance_label}"
        if self._distance_label.text() != distance_text:
            self._distance_label.setText(distance_text)
        nearest_text = f"Near: {self._journey.nearest_object(frame.zoom).name}"
        if self._nearest_label.text() != nearest_text:
            self._nearest_label.setText(nearest_text)

    def _reset_journey(self):
        self._journey.reset()
        self._status_label.setText("Journey reset")

    def _toggle_labels(self, checked: bool):
        self._config.set("appearance", "show_labels", checked)

    def _toggle_full_screen(self):
        if self.isFullScreen():
            self.showNormal()
        else:
            self.showFullScreen()

    def _show_about(self):
        catalog = self._journey.catalog
        QMessageBox.about(
            self,
            "About Cosmoscale",
            f"<h2>{__version_display__}</h2>"
            "<p>An interactive powers-of-ten journey.</p>"
            f"<p>{len(catalog)} objects, from {catalog.first.name} "
            f"({catalog.first.distance_label}) to {catalog.last.name} "
            f"({catalog.last.distance_label}).</p>"
            "<hr>"
            "<p>Scroll or pinch to zoom, move the pointer to look around, "
            "press Home to start over.</p>",
        )

    def closeEvent(self, event):
        """Stop the frame loop and persist settings."""
        self._viewport.gl_widget.stop()
        self._config.save()
        event.accept()
