"""Turn pasted multi-line text into word candidates.

Each line may contain one English headword and, optionally, a Chinese
annotation, e.g. ``"dog: 狗"``. Lines without a headword are skipped.
"""

import re

from wordcapture.domain.model.entry import HEADWORD_PATTERN, Candidate

# CJK unified ideographs (U+4E00–U+9FA5)
ANNOTATION_PATTERN = re.compile(r"[一-龥]+")


def extract(text: str) -> list[Candidate]:
    """Extract ordered, deduplicated candidates from raw text.

    Args:
        text: Raw text, one entry per line.

    Returns:
        Candidates in first-occurrence order. When a headword appears on
        several lines only the first line (and its annotation) is kept.

    Example:
        extract("cat 猫\\ndog: 狗\\ninvalid!!\\ncat again")
        → [Candidate('cat', '猫'), Candidate('dog', '狗'), Candidate('invalid', '')]
    """
    candidates: list[Candidate] = []
    seen: set[str] = set()

    for line in text.splitlines():
        trimmed = line.strip()
        if not trimmed:
            continue

        word_match = HEADWORD_PATTERN.search(trimmed)
        if word_match is None:
            continue
        headword = word_match.group(0).lower()

        annotation_match = ANNOTATION_PATTERN.search(trimmed)
        annotation = annotation_match.group(0) if annotation_match else ""

        if headword in seen:
            continue
        seen.add(headword)
        candidates.append(Candidate(headword=headword, annotation=annotation))

    return candidates


def headwords(candidates: list[Candidate]) -> list[str]:
    return [c.headword for c in candidates]
