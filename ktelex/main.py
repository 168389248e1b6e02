"""Entry point for KTelex.

Usage:
    python -m ktelex.main                        # full mode (daemon + tray)
    python -m ktelex.main --daemon               # daemon only (no GUI)
    python -m ktelex.main --tray                 # tray GUI only
    python -m ktelex.main --simulate "tiengs" "Vietj"
"""
import sys
import signal
import logging
import argparse


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _start_tray_sync_timer(tray, config):
    """Poll the enabled flag so the tray follows the global hotkey.

    The hotkey is handled on the XRecord thread; Qt widgets may only be
    touched from the main thread.
    """
    from PyQt5.QtCore import QTimer

    state = {"enabled": config.enabled}

    def _poll():
        if config.enabled != state["enabled"]:
            state["enabled"] = config.enabled
            tray.refresh()

    timer = QTimer()
    timer.setInterval(250)
    timer.timeout.connect(_poll)
    timer.start()
    return timer  # caller must keep reference to prevent GC


def run_full():
    """Run daemon + tray in a single process (default mode)."""
    from PyQt5.QtWidgets import QApplication
    from ktelex.config import Config
    from ktelex.tray import TrayIcon
    from ktelex.daemon import Daemon

    app = QApplication(sys.argv)
    app.setApplicationName("KTelex")
    app.setQuitOnLastWindowClosed(False)

    config = Config()
    setup_logging(config.debug_logging)

    daemon = Daemon(config)
    tray = TrayIcon(config, daemon)
    tray.show()
    daemon.start()

    sync_timer = _start_tray_sync_timer(tray, config)

    exit_code = app.exec_()
    sync_timer.stop()
    daemon.stop()
    sys.exit(exit_code)


def run_daemon():
    """Run daemon only (headless, for systemd user service)."""
    import time
    from ktelex.config import Config
    from ktelex.daemon import Daemon

    config = Config()
    setup_logging(config.debug_logging)

    logger = logging.getLogger(__name__)
    logger.info("Starting KTelex daemon (headless mode)")

    daemon = Daemon(config)
    daemon.start()

    try:
        while daemon.running:
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        daemon.stop()


def run_tray():
    """Run tray GUI only (edits the shared config file)."""
    from PyQt5.QtWidgets import QApplication
    from ktelex.config import Config
    from ktelex.tray import TrayIcon
    from ktelex.daemon import Daemon

    app = QApplication(sys.argv)
    app.setApplicationName("KTelex")
    app.setQuitOnLastWindowClosed(False)

    config = Config()
    setup_logging(config.debug_logging)

    # No input hook, just a config bridge
    daemon = Daemon(config)

    tray = TrayIcon(config, daemon)
    tray.show()

    exit_code = app.exec_()
    sys.exit(exit_code)


def run_simulate(texts, auto_ie_ye=True, double_key_raw=True, out=None):
    """Print the converted form of each key sequence, one per line."""
    from ktelex.engine import simulate

    out = out or sys.stdout
    for keys in texts:
        print(simulate(keys, auto_ie_ye=auto_ie_ye, double_key_raw=double_key_raw), file=out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="KTelex — Telex Vietnamese input for X11")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--daemon", action="store_true",
                       help="Run daemon only (headless, for systemd)")
    group.add_argument("--tray", action="store_true",
                       help="Run tray GUI only")
    group.add_argument("--simulate", nargs="+", metavar="TEXT",
                       help="Convert Telex key sequences offline and print them")
    parser.add_argument("--no-auto-ie-ye", dest="auto_ie_ye", action="store_false",
                        help="With --simulate: keep ie/ye as typed")
    parser.add_argument("--no-double-key-raw", dest="double_key_raw", action="store_false",
                        help="With --simulate: doubled keys do not revert to raw input")
    return parser


def main(argv=None):
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    args = build_parser().parse_args(argv)

    if args.simulate:
        run_simulate(args.simulate, auto_ie_ye=args.auto_ie_ye, double_key_raw=args.double_key_raw)
    elif args.daemon:
        run_daemon()
    elif args.tray:
        run_tray()
    else:
        run_full()


if __name__ == "__main__":
    main()
