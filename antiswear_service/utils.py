from __future__ import annotations
import logging
import os
import re
from typing import List, Tuple

import nltk
from nltk.tokenize import sent_tokenize

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\S+")
_PUNKT_READY = False
_PUNKT_RESOURCES = ("punkt_tab", "punkt")


class SentenceDataError(RuntimeError):
    """Raised when nltk punkt data is missing and cannot be fetched."""


def _punkt_loaded() -> bool:
    try:
        sent_tokenize("One. Two.")
    except LookupError:
        return False
    return True


def _ensure_punkt() -> None:
    """Locate punkt data, downloading it once when allowed."""
    global _PUNKT_READY
    if _PUNKT_READY:
        return
    if not _punkt_loaded():
        if os.getenv("NLTK_AUTO_DOWNLOAD", "1") not in ("1", "true", "True"):
            raise SentenceDataError("nltk punkt data is not installed and NLTK_AUTO_DOWNLOAD is off")
        for resource in _PUNKT_RESOURCES:
            logger.info("Downloading nltk resource %s", resource)
            nltk.download(resource, quiet=True)
        if not _punkt_loaded():
            raise SentenceDataError("nltk punkt data could not be downloaded")
    _PUNKT_READY = True


def tokens_with_offsets(text: str) -> List[Tuple[int, int, str]]:
    """Return (start, end, token) for every whitespace separated token."""
    return [(m.start(), m.end(), m.group()) for m in _TOKEN_RE.finditer(text)]


def sentences_with_offsets(text: str) -> List[Tuple[int, int, str]]:
    """Return list of (start, end, sentence_text)."""
    if not text.strip():
        return []

    _ensure_punkt()
    sentences = sent_tokenize(text)
    out = []
    current_pos = 0

    for sentence in sentences:
        start = text.find(sentence, current_pos)
        if start == -1:
            start = current_pos
        end = start + len(sentence)
        out.append((start, end, sentence))
        current_pos = end

    if not out:
        out = [(0, len(text), text)]
    return out


def join_preserving_spacing(text: str, keep_ranges: List[Tuple[int, int]]) -> str:
    """Join segments of original text given by keep_ranges."""
    out = " ".join(text[s:e] for (s, e) in keep_ranges)
    # normalize multiple spaces
    return " ".join(out.split())


def redact_ranges(text: str, bad_ranges: List[Tuple[int, int]], token: str = "[PROFANITY]") -> str:
    """Replace bad ranges with a token; keep other text unchanged."""
    if not bad_ranges:
        return text
    bad_ranges = sorted(bad_ranges, key=lambda x: x[0])
    out, i = [], 0
    for s, e in bad_ranges:
        s = max(0, min(len(text), s))
        e = max(0, min(len(text), e))
        if s < i:  # overlapping; skip
            continue
        out.append(text[i:s])
        out.append(token)
        i = e
    out.append(text[i:])
    return "".join(out)
