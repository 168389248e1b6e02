"""Daemon wiring tests — no X11, the replacer is a recording sink."""
import sys
import os
import io
import tempfile
from contextlib import redirect_stdout
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ktelex.config import Config
from ktelex.daemon import Daemon, Hotkey, hotkey_matches, parse_hotkey
from ktelex.engine import simulate
from ktelex.events import KeyEvent, KeyKind
from ktelex.main import main, run_simulate
from ktelex.renderer import RecordingSink
from ktelex.syllables import default_oracle


class EchoingReplacer(RecordingSink):
    """Stands in for X11Replacer; also plays the app receiving real keys."""
    listener = None


def make_daemon(tmp):
    config = Config(os.path.join(tmp, "config.json"))
    replacer = EchoingReplacer()
    daemon = Daemon(config, replacer=replacer, oracle=default_oracle())
    return daemon, config, replacer


def type_keys(daemon, replacer, keys):
    """XRecord is passive: the app gets each key before the daemon sees it."""
    for c in keys:
        event = KeyEvent.for_char(c)
        if event.kind is KeyKind.LETTER:
            replacer.type_key(c)
        daemon.on_key(event)


def test_parse_hotkey():
    assert parse_hotkey("ctrl+shift+s") == Hotkey('s', ctrl=True, shift=True)
    assert parse_hotkey("Control+Alt+V") == Hotkey('v', ctrl=True, alt=True)
    assert parse_hotkey("super+x") == Hotkey('x', meta=True)
    assert parse_hotkey("") is None
    assert parse_hotkey("ctrl+") is None
    assert parse_hotkey("hyper+s") is None
    assert parse_hotkey("ctrl+F1") is None


def test_hotkey_matches_exact_modifiers():
    hotkey = parse_hotkey("ctrl+shift+s")
    assert hotkey_matches(hotkey, KeyEvent(KeyKind.LETTER, letter='s', ctrl=True, shift=True))
    assert not hotkey_matches(hotkey, KeyEvent(KeyKind.LETTER, letter='s', ctrl=True))
    assert not hotkey_matches(hotkey, KeyEvent(KeyKind.SPACE, ctrl=True, shift=True))
    assert not hotkey_matches(None, KeyEvent(KeyKind.LETTER, letter='s'))


def test_daemon_converts_in_echo_mode():
    with tempfile.TemporaryDirectory() as tmp:
        daemon, _, replacer = make_daemon(tmp)
        type_keys(daemon, replacer, "tiengs")
        assert replacer.text == "tiếng"
        assert daemon.engine.options.key_echo is True


def test_hotkey_toggles_enabled():
    with tempfile.TemporaryDirectory() as tmp:
        daemon, config, replacer = make_daemon(tmp)
        daemon.on_key(KeyEvent(KeyKind.LETTER, letter='s', ctrl=True, shift=True))
        assert config.enabled is False
        type_keys(daemon, replacer, "as")
        assert replacer.text == "as"  # passed through untouched
        daemon.on_key(KeyEvent(KeyKind.LETTER, letter='s', ctrl=True, shift=True))
        assert config.enabled is True


def test_set_enabled_drops_syllable():
    with tempfile.TemporaryDirectory() as tmp:
        daemon, _, replacer = make_daemon(tmp)
        type_keys(daemon, replacer, "ba")
        daemon.set_enabled(False)
        assert daemon.engine.raw == ""


def test_apply_config_hot():
    with tempfile.TemporaryDirectory() as tmp:
        daemon, config, replacer = make_daemon(tmp)
        config.double_key_raw = False
        config.set("buffer_timeout_ms", 800)
        daemon.apply_config()
        assert daemon.engine.options.double_key_raw is False
        assert daemon.engine.options.buffer_timeout_ms == 800
        type_keys(daemon, replacer, "ass")
        assert replacer.text == "á"


def test_stop_without_start():
    with tempfile.TemporaryDirectory() as tmp:
        daemon, _, _ = make_daemon(tmp)
        assert daemon.running is False
        daemon.stop()
        assert daemon.running is False


def test_configured_syllables_file():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "mine.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write("ba\n")
        config = Config(os.path.join(tmp, "config.json"))
        config.set("syllables_file", path)
        daemon = Daemon(config, replacer=EchoingReplacer())
        assert "ba" in daemon.oracle
        assert "tieng" not in daemon.oracle
        # the settings preview converts with the same list
        assert simulate("bas", oracle=daemon.oracle) == "bá"
        assert simulate("tiengs", oracle=daemon.oracle) == "tiengs"


def test_cli_simulate():
    out = io.StringIO()
    run_simulate(["tiengs", "Vietj"], out=out)
    assert out.getvalue() == "tiếng\nViệt\n"

    out = io.StringIO()
    with redirect_stdout(out):
        main(["--simulate", "ass", "tien", "--no-double-key-raw", "--no-auto-ie-ye"])
    assert out.getvalue() == "á\ntien\n"


if __name__ == '__main__':
    test_parse_hotkey()
    test_hotkey_matches_exact_modifiers()
    test_daemon_converts_in_echo_mode()
    test_hotkey_toggles_enabled()
    test_set_enabled_drops_syllable()
    test_apply_config_hot()
    test_stop_without_start()
    test_configured_syllables_file()
    test_cli_simulate()
    print("All daemon tests passed.")
