from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List, Dict, Any, Optional

from fastapi import FastAPI, Header, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from dotenv import load_dotenv

from profanity import detect_and_apply
from profiles import build_group, parse_names
from utils import SentenceDataError, sentences_with_offsets, join_preserving_spacing, redact_ranges

# Load .env from this folder
load_dotenv(dotenv_path=Path(__file__).parent / ".env", override=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Antiswear Service", version="1.0.0")

# ------------- CORS -------------
ALLOWED = os.getenv("CORS_ALLOWED_ORIGINS", "*")
allow_origins = [o.strip() for o in ALLOWED.split(",")] if ALLOWED else ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_methods=["POST","GET","OPTIONS"],
    allow_headers=["*"],
)

# ------------- API Keys -------------
_API_KEYS = set(k.strip() for k in (os.getenv("ANTISWEAR_API_KEYS","")).split(",") if k.strip())
def require_api_key(
    x_api_key: Optional[str] = Header(default=None),
    authorization: Optional[str] = Header(default=None),
):
    if not _API_KEYS:
        return
    token = x_api_key
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    if not token or token not in _API_KEYS:
        raise HTTPException(status_code=401, detail="Unauthorized")

# ------------- Defaults -------------
PROFILE_NAMES = parse_names(os.getenv("ANTISWEAR_PROFILES", "en,ru"))
DEFAULT_MODE = os.getenv("ANTISWEAR_MODE", "text").strip().lower()
DEFAULT_ACTION = os.getenv("ACTION_ON_FAIL","remove_sentences").strip().lower()
PROF_ACTION = os.getenv("PROFANITY_ACTION","mask").strip().lower()

# ------------- Schemas -------------
class CheckRequest(BaseModel):
    text: str

class CheckResponse(BaseModel):
    found: bool
    word: Optional[str] = None
    index: Optional[int] = None

class ValidateRequest(BaseModel):
    text: str
    mode: Optional[str] = None                     # text | sentence
    action_on_fail: Optional[str] = None           # remove_sentences | remove_all | redact
    profanity_action: Optional[str] = None         # mask | remove
    return_spans: Optional[bool] = True

class Flagged(BaseModel):
    type: str
    token: str
    index: Optional[int] = None
    span: Optional[List[int]] = None
    sentence: Optional[str] = None

class ValidateResponse(BaseModel):
    status: str                                    # pass | fixed
    clean_text: str
    flagged: List[Flagged]
    steps: List[Dict[str, Any]]
    reasons: List[str]

# ------------- Profiles -------------
antiswear = build_group(PROFILE_NAMES)

@app.get("/health")
def health():
    return {"ok": True, "profiles": PROFILE_NAMES}

@app.post("/check", response_model=CheckResponse, dependencies=[Depends(require_api_key)])
def check(req: CheckRequest):
    result = antiswear.check(req.text or "")
    if result is None:
        return {"found": False}
    return {"found": True, "word": result.word, "index": result.index}

@app.post("/validate", response_model=ValidateResponse, dependencies=[Depends(require_api_key)])
def validate(req: ValidateRequest):
    text = req.text or ""
    if not text.strip():
        return {
            "status": "pass",
            "clean_text": text,
            "flagged": [],
            "steps": [{"name":"noop","passed":True}],
            "reasons": ["Empty text"],
        }

    mode = (req.mode or DEFAULT_MODE).lower()
    action = (req.action_on_fail or DEFAULT_ACTION).lower()
    profanity_action = (req.profanity_action or PROF_ACTION).lower()

    flagged: List[Dict[str, Any]] = []
    steps = []
    reasons = []

    if mode == "sentence":
        keep_ranges: List[tuple] = []
        bad_ranges: List[tuple] = []
        try:
            sents = sentences_with_offsets(text)
        except SentenceDataError as exc:
            logger.error("Sentence mode unavailable: %s", exc)
            raise HTTPException(status_code=503, detail=str(exc))
        for start, end, stext in sents:
            hit = antiswear.check(stext)
            if hit is None:
                keep_ranges.append((start, end))
                continue
            bad_ranges.append((start, end))
            flagged.append({"type": "profanity", "token": hit.word, "index": hit.index,
                            "span": [start, end], "sentence": stext})

        if not bad_ranges:
            out_text = text
        elif action == "remove_all":
            out_text = ""
            reasons.append("Profane content removed (entire text).")
        elif action == "redact":
            out_text = redact_ranges(text, bad_ranges, token="[PROFANITY]")
            reasons.append("Profane sentences redacted.")
        else:  # remove_sentences (default)
            out_text = join_preserving_spacing(text, keep_ranges)
            reasons.append("Profane sentences removed.")
        steps.append({"name": "antiswear", "passed": True, "details": {
            "mode": mode, "action": action, "profane_sentences": len(bad_ranges)}})

    else:  # text mode
        out_text, spans = detect_and_apply(antiswear, text, action=profanity_action)
        flagged = [{"type": "profanity", "token": s["token"], "index": s["index"],
                    "span": [s["start"], s["end"]]} for s in spans]
        if spans:
            if profanity_action == "remove":
                reasons.append(f"{len(spans)} profanities removed.")
            else:
                reasons.append(f"{len(spans)} profanities masked.")
        steps.append({"name": "antiswear", "passed": True, "details": {
            "mode": mode, "hits": len(spans), "action": profanity_action}})

    if not req.return_spans:
        for f in flagged:
            f["span"] = None

    changed = bool(flagged)
    if changed:
        logger.info("Validate: %d flagged (%s mode)", len(flagged), mode)
    return {
        "status": "fixed" if changed else "pass",
        "clean_text": out_text,
        "flagged": flagged,
        "steps": steps,
        "reasons": reasons or ["No profanity detected"],
    }
