"""Settings window (Qt) for KTelex."""
import logging
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QGroupBox, QLabel, QCheckBox, QLineEdit, QSpinBox,
    QPushButton, QFormLayout, QStatusBar, QFileDialog,
)
from PyQt5.QtCore import Qt

from ktelex import autostart
from ktelex.daemon import parse_hotkey
from ktelex.engine import simulate

logger = logging.getLogger(__name__)


class SettingsWindow(QMainWindow):
    """Settings window with all configuration options."""

    def __init__(self, config, daemon, on_change=None, parent=None):
        super().__init__(parent)
        self.config = config
        self.daemon = daemon
        self._on_change = on_change

        self.setWindowTitle("KTelex — Settings")
        self.setMinimumWidth(420)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # === Input ===
        input_group = QGroupBox("Input")
        input_layout = QVBoxLayout(input_group)

        self._enabled_cb = QCheckBox("Vietnamese input (Telex)")
        self._enabled_cb.setChecked(config.enabled)
        self._enabled_cb.toggled.connect(self._on_enabled_changed)
        input_layout.addWidget(self._enabled_cb)

        self._ie_ye_cb = QCheckBox("Auto ie/ye → iê/yê")
        self._ie_ye_cb.setChecked(config.auto_ie_ye)
        self._ie_ye_cb.toggled.connect(self._on_ie_ye_changed)
        input_layout.addWidget(self._ie_ye_cb)

        self._double_key_cb = QCheckBox("maxx ⇒ maxx (not mã)")
        self._double_key_cb.setChecked(config.double_key_raw)
        self._double_key_cb.toggled.connect(self._on_double_key_changed)
        input_layout.addWidget(self._double_key_cb)

        self._autostart_cb = QCheckBox("Start on login")
        self._autostart_cb.setChecked(autostart.is_enabled())
        input_layout.addWidget(self._autostart_cb)

        layout.addWidget(input_group)

        # === Try it ===
        try_group = QGroupBox("Try it")
        try_layout = QFormLayout(try_group)
        self._try_input = QLineEdit()
        self._try_input.setPlaceholderText("tiengs Vietj")
        self._try_input.textChanged.connect(lambda _text: self._update_preview())
        try_layout.addRow("Keys:", self._try_input)
        self._try_output = QLabel()
        self._try_output.setTextInteractionFlags(Qt.TextSelectableByMouse)
        try_layout.addRow("Result:", self._try_output)
        layout.addWidget(try_group)

        # === Advanced ===
        adv_group = QGroupBox("Advanced")
        adv_layout = QFormLayout(adv_group)

        self._timeout_spin = QSpinBox()
        self._timeout_spin.setRange(100, 60000)
        self._timeout_spin.setSingleStep(100)
        self._timeout_spin.setSuffix(" ms")
        self._timeout_spin.setValue(config.buffer_timeout_ms)
        adv_layout.addRow("New syllable after idle:", self._timeout_spin)

        self._hotkey_toggle = QLineEdit(config.hotkey_toggle)
        adv_layout.addRow("Toggle on/off:", self._hotkey_toggle)

        file_row = QHBoxLayout()
        self._syllables_input = QLineEdit(config.syllables_file)
        self._syllables_input.setPlaceholderText("(bundled list)")
        file_row.addWidget(self._syllables_input)
        browse_btn = QPushButton("Browse...")
        browse_btn.clicked.connect(self._browse_syllables)
        file_row.addWidget(browse_btn)
        adv_layout.addRow("Syllables file:", file_row)

        self._debug_cb = QCheckBox("Enable debug logging")
        self._debug_cb.setChecked(config.debug_logging)
        adv_layout.addRow(self._debug_cb)

        layout.addWidget(adv_group)

        # === Status ===
        status_group = QGroupBox("Status")
        status_layout = QVBoxLayout(status_group)
        self._status_label = QLabel()
        status_layout.addWidget(self._status_label)
        layout.addWidget(status_group)

        # === Buttons ===
        btn_row = QHBoxLayout()
        save_btn = QPushButton("Save")
        save_btn.clicked.connect(self._save)
        btn_row.addWidget(save_btn)

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.close)
        btn_row.addWidget(close_btn)

        layout.addLayout(btn_row)

        self._statusbar = QStatusBar()
        self.setStatusBar(self._statusbar)

        self.refresh()

    def refresh(self):
        """Refresh displayed status and toggles."""
        running = self.daemon.running
        enabled = self.config.enabled

        for cb, value in (
            (self._enabled_cb, enabled),
            (self._ie_ye_cb, self.config.auto_ie_ye),
            (self._double_key_cb, self.config.double_key_raw),
        ):
            cb.blockSignals(True)
            cb.setChecked(value)
            cb.blockSignals(False)

        status_parts = [
            f"Daemon: {'running' if running else 'stopped'}",
            f"Telex: {'ON' if enabled else 'OFF'}",
        ]
        self._status_label.setText(" | ".join(status_parts))
        self._update_preview()

    def _changed(self):
        self.daemon.apply_config()
        if self._on_change:
            self._on_change()

    def _on_enabled_changed(self, checked):
        self.daemon.set_enabled(checked)
        if self._on_change:
            self._on_change()
        self.refresh()

    def _on_ie_ye_changed(self, checked):
        self.config.auto_ie_ye = checked
        self._changed()
        self._update_preview()

    def _on_double_key_changed(self, checked):
        self.config.double_key_raw = checked
        self._changed()
        self._update_preview()

    def _update_preview(self):
        keys = self._try_input.text()
        self._try_output.setText(simulate(
            keys,
            oracle=self.daemon.oracle,
            auto_ie_ye=self._ie_ye_cb.isChecked(),
            double_key_raw=self._double_key_cb.isChecked(),
        ))

    def _browse_syllables(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Syllables file", self._syllables_input.text(), "Text files (*.txt);;All files (*)")
        if path:
            self._syllables_input.setText(path)

    def _save(self):
        hotkey = self._hotkey_toggle.text().strip()
        if parse_hotkey(hotkey) is None:
            self._statusbar.showMessage(f"Unusable hotkey: {hotkey!r}", 5000)
            return

        syllables_changed = self._syllables_input.text() != self.config.syllables_file
        self.config.set("buffer_timeout_ms", self._timeout_spin.value())
        self.config.set("hotkey_toggle", hotkey)
        self.config.set("syllables_file", self._syllables_input.text())
        self.config.set("debug_logging", self._debug_cb.isChecked())

        want_autostart = self._autostart_cb.isChecked()
        if want_autostart != autostart.is_enabled():
            if autostart.set_enabled(want_autostart):
                self.config.set("autostart", want_autostart)
            else:
                self._autostart_cb.setChecked(autostart.is_enabled())

        logging.getLogger().setLevel(logging.DEBUG if self.config.debug_logging else logging.INFO)
        if syllables_changed:
            self.daemon.reload_syllables()
        self._changed()
        self._statusbar.showMessage("Settings saved.", 3000)
        self.refresh()
