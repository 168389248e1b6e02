"""System tray icon with context menu for KTelex."""
import logging
from PyQt5.QtWidgets import QSystemTrayIcon, QMenu, QAction, QApplication
from PyQt5.QtGui import QIcon, QPixmap, QPainter, QColor, QFont
from PyQt5.QtCore import Qt

from ktelex import autostart

logger = logging.getLogger(__name__)


def _create_icon(enabled: bool) -> QIcon:
    """Blue "V" when Vietnamese input is on, grey when off."""
    size = 64
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.transparent)
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing)

    color = QColor(0x19, 0x76, 0xD2) if enabled else QColor(0x9E, 0x9E, 0x9E)
    painter.setBrush(color)
    painter.setPen(Qt.NoPen)
    painter.drawRoundedRect(4, 4, size - 8, size - 8, 8, 8)

    painter.setPen(QColor(255, 255, 255))
    painter.setFont(QFont("Sans", 30, QFont.Bold))
    painter.drawText(pixmap.rect(), Qt.AlignCenter, "V")

    painter.end()
    return QIcon(pixmap)


def _tooltip(enabled: bool) -> str:
    return "KTelex" + (" [ON]" if enabled else " [OFF]")


class TrayIcon(QSystemTrayIcon):
    """Tray icon: Vietnamese on/off, conversion options, autostart, settings."""

    def __init__(self, config, daemon, parent=None):
        super().__init__(parent)
        self.config = config
        self.daemon = daemon
        self._settings_window = None

        self._build_menu()
        self.refresh()

        self.activated.connect(self._on_activated)

    def _checkable(self, menu, text, checked, slot) -> QAction:
        action = QAction(text, menu)
        action.setCheckable(True)
        action.setChecked(checked)
        action.triggered.connect(slot)
        menu.addAction(action)
        return action

    def _build_menu(self):
        menu = QMenu()

        self._enabled_action = self._checkable(
            menu, "Vietnamese input", self.config.enabled, self._on_enabled_triggered)

        menu.addSeparator()

        self._ie_ye_action = self._checkable(
            menu, "Auto ie/ye → iê/yê", self.config.auto_ie_ye, self._on_ie_ye_triggered)
        self._double_key_action = self._checkable(
            menu, "maxx ⇒ maxx (not mã)", self.config.double_key_raw,
            self._on_double_key_triggered)

        menu.addSeparator()

        self._autostart_action = self._checkable(
            menu, "Start on login", autostart.is_enabled(), self._on_autostart_triggered)

        settings_action = QAction("Settings...", menu)
        settings_action.triggered.connect(self._open_settings)
        menu.addAction(settings_action)

        menu.addSeparator()

        quit_action = QAction("Quit", menu)
        quit_action.triggered.connect(self._quit)
        menu.addAction(quit_action)

        self.setContextMenu(menu)

    def refresh(self):
        """Sync icon, tooltip and check marks with the config."""
        enabled = self.config.enabled
        self.setIcon(_create_icon(enabled))
        self.setToolTip(_tooltip(enabled))
        self._enabled_action.setChecked(enabled)
        self._ie_ye_action.setChecked(self.config.auto_ie_ye)
        self._double_key_action.setChecked(self.config.double_key_raw)

    def _on_enabled_triggered(self, checked):
        self.daemon.set_enabled(checked)
        self.refresh()

    def _on_ie_ye_triggered(self, checked):
        self.config.auto_ie_ye = checked
        self.daemon.apply_config()

    def _on_double_key_triggered(self, checked):
        self.config.double_key_raw = checked
        self.daemon.apply_config()

    def _on_autostart_triggered(self, checked):
        if autostart.set_enabled(checked):
            self.config.set("autostart", checked)
        else:
            self._autostart_action.setChecked(autostart.is_enabled())
            self.showMessage("KTelex", "Could not update the autostart entry.",
                             QSystemTrayIcon.Warning, 3000)

    def _open_settings(self):
        from ktelex.settings_ui import SettingsWindow
        if self._settings_window is None:
            self._settings_window = SettingsWindow(self.config, self.daemon, on_change=self.refresh)
        self._settings_window.refresh()
        self._settings_window.show()
        self._settings_window.raise_()
        self._settings_window.activateWindow()

    def _quit(self):
        self.daemon.stop()
        QApplication.quit()

    def _on_activated(self, reason):
        if reason == QSystemTrayIcon.Trigger:  # left click
            self.daemon.toggle_enabled()
            self.refresh()
            logger.info("Toggled: %s", "enabled" if self.config.enabled else "disabled")
