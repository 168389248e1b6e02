"""Valid-syllable oracle — membership test over canonical skeletons."""
import logging
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

BUNDLED_SYLLABLES = Path(__file__).parent / "resources" / "syllables.txt"

_default = None


class SyllableOracle:
    """Set of syllable skeletons ('tieng', 'dduong', 'qua', ...).

    Lookups expect an already canonicalised skeleton (see vowels.skeleton).
    """

    def __init__(self, skeletons: Iterable[str] = ()):
        self._skeletons = frozenset(s.strip().lower() for s in skeletons if s.strip())

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "SyllableOracle":
        """Build from real Vietnamese words ('tiếng', 'Đường')."""
        from ktelex.vowels import skeleton
        return cls(skeleton(w) for w in words)

    @classmethod
    def from_file(cls, path) -> "SyllableOracle":
        """Load one skeleton per line; '#' starts a comment."""
        entries = []
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.split('#', 1)[0].strip()
                if line:
                    entries.append(line)
        oracle = cls(entries)
        logger.debug("Loaded %d syllable skeletons from %s", len(oracle), path)
        return oracle

    def __contains__(self, skel: str) -> bool:
        return skel in self._skeletons

    def __len__(self) -> int:
        return len(self._skeletons)

    def __iter__(self):
        return iter(sorted(self._skeletons))


def default_oracle() -> SyllableOracle:
    """The bundled skeleton list, loaded once."""
    global _default
    if _default is None:
        _default = SyllableOracle.from_file(BUNDLED_SYLLABLES)
    return _default


def load_oracle(path: Optional[str] = None) -> SyllableOracle:
    """Load a user skeleton file, falling back to the bundled list."""
    if not path:
        return default_oracle()
    try:
        return SyllableOracle.from_file(path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read syllables file %s (%s) — using bundled list", path, e)
        return default_oracle()
