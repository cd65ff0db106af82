from __future__ import annotations
import logging
from typing import Any, Dict, List, Tuple

from antiswear import AntiswearGroup
from utils import tokens_with_offsets

logger = logging.getLogger(__name__)


def find_spans(group: AntiswearGroup, text: str) -> List[Dict[str, Any]]:
    """
    Return every flagged region of text.
    - spans: [{token: str, index: int, start: int, end: int}]
    """
    tokens = tokens_with_offsets(text)
    if not tokens:
        return []

    spans = []
    for i, (start, end, token) in enumerate(tokens):
        if group.check(token) is not None:
            spans.append({"token": token, "index": i, "start": start, "end": end})
    if spans or len(tokens) == 1:
        return spans

    # spelled-out word ("f u c k"): no token hits alone, the whole run does
    if group.check(text) is not None:
        start, end = tokens[0][0], tokens[-1][1]
        return [{"token": text[start:end], "index": 0, "start": start, "end": end}]
    return []


def detect_and_apply(group: AntiswearGroup, text: str, action: str = "mask",
                     censor_char: str = "*") -> Tuple[str, List[Dict[str, Any]]]:
    """
    Return (clean_text, spans).
    - action "mask" replaces each flagged token with censor_char, "remove" cuts it out.
    """
    spans = find_spans(group, text)
    if not spans:
        return text, []
    logger.debug("Profanity hits: %d", len(spans))

    out, k = [], 0
    for s in spans:
        out.append(text[k:s["start"]])
        if action != "remove":
            out.append(censor_char * (s["end"] - s["start"]))
        k = s["end"]
    out.append(text[k:])
    clean = "".join(out)
    if action == "remove":
        clean = " ".join(clean.split())
    return clean, spans
