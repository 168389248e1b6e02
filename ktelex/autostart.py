"""Start-on-login support via an XDG autostart desktop entry."""
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

AUTOSTART_DIR = Path.home() / ".config" / "autostart"
DESKTOP_NAME = "ktelex.desktop"

DESKTOP_ENTRY = """[Desktop Entry]
Type=Application
Name=KTelex
Comment=Telex Vietnamese input
Exec=ktelex
Icon=input-keyboard
Terminal=false
X-GNOME-Autostart-enabled=true
"""


def _entry_path(directory: Path = None) -> Path:
    return Path(directory or AUTOSTART_DIR) / DESKTOP_NAME


def is_enabled(directory: Path = None) -> bool:
    return _entry_path(directory).exists()


def set_enabled(enabled: bool, directory: Path = None) -> bool:
    """Create or remove the desktop entry. Returns False if the file system refused."""
    path = _entry_path(directory)
    try:
        if enabled:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DESKTOP_ENTRY, encoding="utf-8")
            logger.info("Autostart entry written: %s", path)
        elif path.exists():
            path.unlink()
            logger.info("Autostart entry removed: %s", path)
    except OSError as e:
        logger.warning("Could not update autostart entry %s: %s", path, e)
        return False
    return True
