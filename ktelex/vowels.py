"""Vietnamese vowel tables — tones, circumflex, breve/horn, skeletons."""
from typing import Optional

# Tone rows, indexed: sắc, huyền, hỏi, ngã, nặng
TONED_VOWELS = {
    'a': 'áàảãạ', 'ă': 'ắằẳẵặ', 'â': 'ấầẩẫậ',
    'e': 'éèẻẽẹ', 'ê': 'ếềểễệ', 'i': 'íìỉĩị',
    'o': 'óòỏõọ', 'ô': 'ốồổỗộ', 'ơ': 'ớờởỡợ',
    'u': 'úùủũụ', 'ư': 'ứừửữự', 'y': 'ýỳỷỹỵ',
    'A': 'ÁÀẢÃẠ', 'Ă': 'ẮẰẲẴẶ', 'Â': 'ẤẦẨẪẬ',
    'E': 'ÉÈẺẼẸ', 'Ê': 'ẾỀỂỄỆ', 'I': 'ÍÌỈĨỊ',
    'O': 'ÓÒỎÕỌ', 'Ô': 'ỐỒỔỖỘ', 'Ơ': 'ỚỜỞỠỢ',
    'U': 'ÚÙỦŨỤ', 'Ư': 'ỨỪỬỮỰ', 'Y': 'ÝỲỶỸỴ',
}

# Toned char → (untoned vowel, tone index)
_TONE_LOOKUP = {
    toned: (base, idx)
    for base, row in TONED_VOWELS.items()
    for idx, toned in enumerate(row)
}

CIRCUMFLEX = {
    'a': 'â', 'A': 'Â',
    'e': 'ê', 'E': 'Ê',
    'o': 'ô', 'O': 'Ô',
}
CIRCUMFLEX_REVERSE = {v: k for k, v in CIRCUMFLEX.items()}

BREVE_HORN = {
    'a': 'ă', 'A': 'Ă',
    'o': 'ơ', 'O': 'Ơ',
    'u': 'ư', 'U': 'Ư',
}
BREVE_HORN_REVERSE = {v: k for k, v in BREVE_HORN.items()}

# Untoned vowels, plain and marked
VOWELS = set(TONED_VOWELS)

# Marked vowels take tone priority
SPECIAL_VOWELS = set(CIRCUMFLEX_REVERSE) | set(BREVE_HORN_REVERSE)

STROKE_D = {'d': 'đ', 'D': 'Đ'}
STROKE_D_REVERSE = {v: k for k, v in STROKE_D.items()}


def base_vowel(c: str) -> str:
    """Strip the tone mark only: 'ấ' → 'â'. Non-toned chars are returned as-is."""
    hit = _TONE_LOOKUP.get(c)
    return hit[0] if hit else c


def pure_base(c: str) -> str:
    """Strip tone and diacritic: 'ấ' → 'a', 'Ư' → 'U'."""
    b = base_vowel(c)
    if b in CIRCUMFLEX_REVERSE:
        return CIRCUMFLEX_REVERSE[b]
    if b in BREVE_HORN_REVERSE:
        return BREVE_HORN_REVERSE[b]
    return b


def tone_of(c: str) -> Optional[int]:
    """Tone index carried by c, or None."""
    hit = _TONE_LOOKUP.get(c)
    return hit[1] if hit else None


def apply_tone(vowel: str, tone: int) -> str:
    """Tone an untoned vowel. Returns vowel unchanged if it has no tone row."""
    row = TONED_VOWELS.get(vowel)
    if row is None:
        return vowel
    return row[tone]


def transfer_tone(original: str, new_base: str) -> str:
    """Carry the tone of original (if any) onto new_base."""
    tone = tone_of(original)
    if tone is None:
        return new_base
    return apply_tone(new_base, tone)


def is_vowel(c: str) -> bool:
    return base_vowel(c) in VOWELS


def is_special(c: str) -> bool:
    return base_vowel(c) in SPECIAL_VOWELS


def has_circumflex(c: str) -> bool:
    return base_vowel(c) in CIRCUMFLEX_REVERSE


def has_breve_horn(c: str) -> bool:
    return base_vowel(c) in BREVE_HORN_REVERSE


def has_tone_mark(text: str) -> bool:
    return any(c in _TONE_LOOKUP for c in text)


def first_tone(text: str) -> Optional[tuple]:
    """(position, tone index) of the first toned character, or None."""
    for i, c in enumerate(text):
        tone = tone_of(c)
        if tone is not None:
            return i, tone
    return None


def strip_tones(text: str) -> str:
    return ''.join(base_vowel(c) for c in text)


def skeleton(text: str) -> str:
    """Canonical ASCII form used for syllable lookups.

    Lowercase, tones and diacritics removed, 'đ' spelled as 'dd':
    'Đường' → 'dduong'.
    """
    out = []
    for c in text:
        if c in STROKE_D_REVERSE:
            out.append('dd')
        else:
            out.append(pure_base(c).lower())
    return ''.join(out)
