"""End-to-end Telex scenarios through simulate()."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ktelex.engine import simulate

# (keys, expected) with default options
SCENARIOS = [
    # tones
    ("as", "á"), ("af", "à"), ("ar", "ả"), ("ax", "ã"), ("aj", "ạ"),
    ("asf", "à"),
    # circumflex / breve / horn
    ("az", "â"), ("ez", "ê"), ("oz", "ô"),
    ("aw", "ă"), ("ow", "ơ"), ("uw", "ư"),
    ("azs", "ấ"), ("uwj", "ự"),
    # clusters
    ("tuongw", "tương"), ("tuongwf", "tường"), ("nguoiwf", "người"),
    ("muonzs", "muốn"), ("quangw", "quăng"),
    # stroke d
    ("dangd", "đang"), ("duongwdf", "đường"),
    # tone placement
    ("quas", "quá"), ("gias", "giá"), ("gis", "gí"),
    ("muas", "múa"), ("kias", "kía"), ("hoaf", "hoà"),
    ("khoer", "khoẻ"), ("thuyr", "thuỷ"), ("toans", "toán"),
    # ie/ye
    ("tien", "tiên"), ("yen", "yên"), ("tiens", "tiến"),
    ("tiengs", "tiếng"), ("Vietj", "Việt"),
    # stop endings
    ("hocs", "hóc"), ("hocj", "học"), ("hocf", "hocf"), ("hocr", "hocr"),
    ("sachs", "sách"), ("sachf", "sachf"), ("matj", "mạt"), ("depf", "depf"),
    # not Vietnamese: raw keys stay
    ("asc", "asc"), ("rerun", "rerun"), ("xyz", "xyz"), ("ties", "ties"),
    # doubled keys revert to raw
    ("ass", "ass"), ("maxx", "maxx"), ("aww", "aww"), ("azz", "azz"),
    # case
    ("As", "Á"), ("Tiengs", "Tiếng"),
    # engine regression list
    ("muonws", "mướn"), ("luonw", "lươn"), ("muons", "muón"), ("tuons", "tuón"),
    ("tias", "tía"), ("zzs", "zzs"), ("aks", "aks"), ("mats", "mát"), ("deps", "dép"),
    # rarer rhymes
    ("queoj", "quẹo"), ("quauj", "quạu"), ("yengr", "yểng"),
]


def test_scenarios():
    failures = []
    for keys, expected in SCENARIOS:
        got = simulate(keys)
        if got != expected:
            failures.append((keys, expected, got))
    assert not failures, failures


def test_sentence():
    assert simulate("tiengs Vietj") == "tiếng Việt"
    assert simulate("nguoiwf Vietj\nNam") == "người Việt\nNam"


def test_double_key_raw_off():
    assert simulate("ass", double_key_raw=False) == "á"
    assert simulate("maxx", double_key_raw=False) == "mã"
    assert simulate("dadd", double_key_raw=False) == "da"
    assert simulate("dadd") == "dadd"


def test_auto_ie_ye_off():
    assert simulate("tien", auto_ie_ye=False) == "tien"
    assert simulate("tiens", auto_ie_ye=False) == "tién"


def test_backspace():
    assert simulate("as\b") == "a"
    assert simulate("tuongw\bw") == simulate("tuongw")
    # Empty syllable: the editor deletes the previous character
    assert simulate("x ab\b\b\b") == "x"


def test_escape():
    assert simulate("as\x1b") == "as"
    assert simulate("\x1b") == ""
    assert simulate("tiengs\x1b Vietj") == "tiengs Việt"


def test_other_keys_end_syllable():
    assert simulate("a1s") == "a1s"
    assert simulate("ba.s") == "ba.s"


def test_open_uo_rhymes_accepted():
    for keys in ("thuowr", "huow", "khuow", "quowf"):
        assert simulate(keys) != keys, keys


def test_deterministic():
    keys = "tiengs Vietj nguoiwf"
    assert simulate(keys) == simulate(keys)


if __name__ == '__main__':
    test_scenarios()
    test_sentence()
    test_double_key_raw_off()
    test_auto_ie_ye_off()
    test_backspace()
    test_escape()
    test_other_keys_end_syllable()
    test_open_uo_rhymes_accepted()
    test_deterministic()
    print("All simulate tests passed.")
