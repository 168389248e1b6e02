"""Apply one Telex modifier key to a syllable buffer.

Every function returns the rewritten buffer, or None when the modifier has
nothing to act on (the caller then types the key literally).
"""
from typing import Optional

from ktelex.keys import Modifier, ModifierKey
from ktelex.tone import find_tone_position
from ktelex.validator import tone_allowed
from ktelex.vowels import (
    BREVE_HORN, CIRCUMFLEX, STROKE_D, STROKE_D_REVERSE,
    apply_tone, base_vowel, has_breve_horn, has_circumflex, is_vowel,
    pure_base, skeleton, transfer_tone,
)


def _replace(buffer: str, pos: int, char: str) -> str:
    return buffer[:pos] + char + buffer[pos + 1:]


def _with_mark(c: str, table: dict) -> str:
    """Mark c using table, keeping its case and tone."""
    return transfer_tone(c, table[pure_base(c)])


def toggle_stroke(buffer: str) -> Optional[str]:
    """d ↔ đ on the first letter only."""
    if not buffer:
        return None
    first = buffer[0]
    if first in STROKE_D:
        return STROKE_D[first] + buffer[1:]
    if first in STROKE_D_REVERSE:
        return STROKE_D_REVERSE[first] + buffer[1:]
    return None


def apply_circumflex(buffer: str) -> Optional[str]:
    """First a/e/o (left to right) without a circumflex yet."""
    for i, c in enumerate(buffer):
        if pure_base(c) in CIRCUMFLEX and not has_circumflex(c):
            return _replace(buffer, i, _with_mark(c, CIRCUMFLEX))
    return None


def _is_letter(buffer: str, i: int, letter: str) -> bool:
    return pure_base(buffer[i]).lower() == letter


def apply_breve_horn(buffer: str) -> Optional[str]:
    """Breve/horn with cluster rules: tương, hoặc, quăng, then plain ă/ơ/ư."""
    pairs = range(len(buffer) - 1)

    # uo → ươ
    for i in pairs:
        if (_is_letter(buffer, i, 'u') and _is_letter(buffer, i + 1, 'o')
                and not has_breve_horn(buffer[i]) and not has_breve_horn(buffer[i + 1])):
            u = _with_mark(buffer[i], BREVE_HORN)
            o = _with_mark(buffer[i + 1], BREVE_HORN)
            return buffer[:i] + u + o + buffer[i + 2:]

    # oa → oă
    for i in pairs:
        if (_is_letter(buffer, i, 'o') and _is_letter(buffer, i + 1, 'a')
                and not has_breve_horn(buffer[i + 1])):
            return _replace(buffer, i + 1, _with_mark(buffer[i + 1], BREVE_HORN))

    # ua + consonant → uă (quăng); a bare "ua" falls through to cưa
    for i in pairs:
        if (_is_letter(buffer, i, 'u') and _is_letter(buffer, i + 1, 'a')
                and i + 2 < len(buffer) and not is_vowel(buffer[i + 2])
                and not has_breve_horn(buffer[i + 1])):
            return _replace(buffer, i + 1, _with_mark(buffer[i + 1], BREVE_HORN))

    for i, c in enumerate(buffer):
        if pure_base(c) in BREVE_HORN and not has_breve_horn(c):
            return _replace(buffer, i, _with_mark(c, BREVE_HORN))
    return None


def apply_tone_key(buffer: str, tone: int) -> Optional[str]:
    """Put tone on the vowel chosen by the tone locator."""
    if not tone_allowed(buffer, tone):
        return None
    pos = find_tone_position(buffer)
    if pos is None:
        return None
    vowel = base_vowel(buffer[pos])
    toned = apply_tone(vowel, tone)
    if toned == vowel:
        return None
    return _replace(buffer, pos, toned)


def apply_modifier(buffer: str, key: ModifierKey, oracle) -> Optional[str]:
    """Apply a modifier key, or None when it does not apply.

    Modifiers only act on buffers that already spell a known syllable.
    """
    if not buffer or skeleton(buffer) not in oracle:
        return None
    if key.kind is Modifier.STROKE:
        return toggle_stroke(buffer)
    if key.kind is Modifier.CIRCUMFLEX:
        return apply_circumflex(buffer)
    if key.kind is Modifier.BREVE_HORN:
        return apply_breve_horn(buffer)
    return apply_tone_key(buffer, key.tone.value)
