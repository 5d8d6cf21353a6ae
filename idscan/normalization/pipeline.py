"""
OCR text post-processing pipeline.

raw text -> normalize -> digit corrections -> spelling correction ->
proper-noun reconciliation -> enhanced text
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from ..config import ExtractionConfig, get_config
from ..logger import get_logger
from ..utils.similarity import similarity
from .proper_nouns import ProperNounGuard
from .spell_corrector import SpellCorrector
from .text_normalizer import TextNormalizer

logger = get_logger(__name__)

_WHITESPACE_SPLIT = re.compile(r"(\s+)")
_EDGE_PUNCT = ".,;:!?'\"()[]{}-"


def reconcile_proper_nouns(
    original: str,
    processed: str,
    guard: ProperNounGuard,
    threshold: float = 0.7,
    window: int = 2,
    max_drift: int = 5,
    protected: Iterable[str] = (),
) -> str:
    """
    Restore proper nouns that post-processing garbled.

    Tokens of the processed text are aligned positionally with the original
    tokens (within +/- `window` positions). A processed token is reverted
    to an original token when the original is flagged by the guard and the
    two are at least `threshold` similar. When the token counts differ by
    more than `max_drift` the alignment is unreliable and the processed
    text is returned untouched. Original tokens listed in `protected`
    (lowercase) are garbled forms a correction table rewrote on purpose
    and are never restored.
    """
    original_words = original.split()
    protected = frozenset(protected)
    parts = _WHITESPACE_SPLIT.split(processed)
    positions = [i for i, part in enumerate(parts) if part and not part.isspace()]

    if abs(len(original_words) - len(positions)) > max_drift:
        logger.debug(
            f"Skipping proper-noun reconciliation: token drift "
            f"{len(original_words)} -> {len(positions)}"
        )
        return processed

    for k, part_idx in enumerate(positions):
        word = parts[part_idx]
        candidates = original_words[max(0, k - window):k + window + 1]
        if word in candidates:
            continue

        best: Optional[str] = None
        best_score = threshold
        for candidate in candidates:
            if candidate.strip(_EDGE_PUNCT).lower() in protected:
                continue
            if not guard.might_be_transliterated_word(candidate):
                continue
            score = similarity(candidate, word)
            if score >= best_score:
                best, best_score = candidate, score

        if best is not None:
            logger.debug(f"Restored proper noun {word!r} -> {best!r} ({best_score:.2f})")
            parts[part_idx] = best

    return "".join(parts)


class PostProcessor:
    """
    Turns raw OCR text into enhanced text.

    Collaborators are injectable; the guard is shared with the spelling
    corrector and learns every garbled form the corrector and normalizer
    know, so their corrections are never reverted.
    """

    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        spell_corrector: Optional[SpellCorrector] = None,
        config: Optional[ExtractionConfig] = None,
    ):
        self.normalizer = normalizer or TextNormalizer()
        self.spell_corrector = spell_corrector or SpellCorrector()
        self.guard = self.spell_corrector.guard
        self.guard.exclude(self.normalizer.known_variants())
        self.config = config or get_config().extraction

    def enhance(self, raw_text: str) -> str:
        if not raw_text or not raw_text.strip():
            return ""

        text = self.normalizer.normalize(raw_text)
        text = self.normalizer.correct_ocr_errors(text)
        text = self.spell_corrector.correct(text)

        return reconcile_proper_nouns(
            raw_text,
            text,
            self.guard,
            threshold=self.config.similarity_threshold,
            window=self.config.alignment_window,
            max_drift=self.config.max_token_drift,
            protected=self.normalizer.rewritten_words(raw_text),
        )

