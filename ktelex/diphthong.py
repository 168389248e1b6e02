"""Automatic ie/ye → iê/yê when the syllable continues (tiên, yên, kiểu)."""
from typing import Optional

from ktelex.vowels import base_vowel, has_circumflex, transfer_tone

IE_YE_FOLLOWERS = set('nmtcpuNMTCPU')


def try_convert_ie_ye(buffer: str, following: str) -> Optional[str]:
    """Return buffer with its trailing 'e' promoted to 'ê' plus following.

    Only fires when buffer ends in i/y + e and following is a letter that
    can close or extend the diphthong.
    """
    if following not in IE_YE_FOLLOWERS or len(buffer) < 2:
        return None
    before, last = buffer[-2], buffer[-1]
    if before.lower() not in ('i', 'y'):
        return None
    if base_vowel(last).lower() != 'e' or has_circumflex(last):
        return None
    e_hat = 'Ê' if base_vowel(last).isupper() else 'ê'
    return buffer[:-1] + transfer_tone(last, e_hat) + following
