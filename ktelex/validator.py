"""Render decision — show the converted syllable or fall back to raw keys."""
from ktelex.keys import Tone
from ktelex.vowels import first_tone, skeleton

_STOP_TONES = {Tone.SAC.value, Tone.NANG.value}


def ends_with_stop(buffer: str) -> bool:
    """c, ch, t, p endings (checked on the skeleton, at least two letters)."""
    skel = skeleton(buffer)
    if len(skel) < 2:
        return False
    return skel.endswith('ch') or skel[-1] in 'ctp'


def tone_allowed(buffer: str, tone: int) -> bool:
    """Stop endings only take sắc or nặng: học, sách — never hòc."""
    return not ends_with_stop(buffer) or tone in _STOP_TONES


def has_double_keystroke(raw: str) -> bool:
    """Two identical keys in a row, ignoring case ('maxx', 'aWw')."""
    lowered = raw.lower()
    return any(a == b for a, b in zip(lowered, lowered[1:]))


def decide(buffer: str, raw: str, oracle, double_key_raw: bool = True) -> str:
    """Text that should be on screen for this syllable."""
    if not raw:
        return ""
    if double_key_raw and has_double_keystroke(raw):
        return raw
    if skeleton(buffer) not in oracle:
        return raw
    toned = first_tone(buffer)
    if toned is not None and not tone_allowed(buffer, toned[1]):
        return raw
    return buffer
