"""Tone placement — which vowel of a syllable carries the tone mark.

Rules, in order of priority:
  1. Marked vowels (ă â ê ô ơ ư) win. Two adjacent marked vowels form a
     diphthong (ươ, uô, iê) and the second one takes the tone: người, muối.
  2. oa, oe, uy → second vowel: hoà, khoẻ, thuỷ.
  3. Closed syllable → last vowel: toán, muốn.
  4. Open syllable → second-to-last vowel: mùa, kìa.

'u' after 'q' and 'i' in 'gi' + vowel belong to the onset and never count.
"""
from typing import List, Optional

from ktelex.vowels import (
    apply_tone, base_vowel, first_tone, is_special, is_vowel, skeleton,
)

_SECOND_VOWEL_PAIRS = {('o', 'a'), ('o', 'e'), ('u', 'y')}

# Letters that may close a syllable; appending one re-checks tone placement
ENDING_CONSONANTS = set('nmtcpghNMTCPGH')


def vowel_positions(buffer: str) -> List[int]:
    """Indices of nucleus vowels, skipping the qu/gi onsets."""
    positions = []
    for i, c in enumerate(buffer):
        if not is_vowel(c):
            continue
        prev = buffer[i - 1].lower() if i > 0 else ''
        if prev == 'q' and c.lower() == 'u':
            continue
        if (prev == 'g' and c.lower() == 'i'
                and i + 1 < len(buffer) and is_vowel(buffer[i + 1])):
            continue
        positions.append(i)
    return positions


def find_tone_position(buffer: str) -> Optional[int]:
    """Index of the vowel that should carry the tone, or None."""
    positions = vowel_positions(buffer)
    if not positions:
        return None
    if len(positions) == 1:
        return positions[0]

    special = [p for p in positions if is_special(buffer[p])]
    if special:
        if len(special) >= 2 and special[1] == special[0] + 1:
            return special[1]
        return special[0]

    last, second_last = positions[-1], positions[-2]
    pair = (base_vowel(buffer[second_last]).lower(), base_vowel(buffer[last]).lower())
    if pair in _SECOND_VOWEL_PAIRS:
        return last

    if last < len(buffer) - 1:
        return last
    return second_last


def reposition_tone(buffer: str, oracle) -> Optional[str]:
    """Move an existing tone after a closing consonant was appended.

    'muón' + 'g' style changes can shift where the tone belongs. Returns the
    rewritten buffer, or None when nothing moves.
    """
    if len(buffer) < 2 or buffer[-1] not in ENDING_CONSONANTS:
        return None
    toned = first_tone(buffer)
    if toned is None:
        return None
    if skeleton(buffer) not in oracle:
        return None

    old_pos, tone = toned
    chars = list(buffer)
    chars[old_pos] = base_vowel(chars[old_pos])
    new_pos = find_tone_position(''.join(chars))
    if new_pos is None or new_pos == old_pos:
        return None
    chars[new_pos] = apply_tone(chars[new_pos], tone)
    return ''.join(chars)
