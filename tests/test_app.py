"""Tests covering the HTTP service."""

from __future__ import annotations

import utils

SENTENCES = "This is fine. What the fuck is this?"


def test_health(api_client):
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "profiles": ["en", "ru"]}


def test_check_reports_word_and_index(api_client):
    response = api_client.post("/check", json={"text": "hello fuck world"})

    assert response.status_code == 200, response.text
    assert response.json() == {"found": True, "word": "fuck", "index": 1}


def test_check_clean_text(api_client):
    response = api_client.post("/check", json={"text": "hello world"})

    assert response.json() == {"found": False, "word": None, "index": None}


def test_check_requires_text(api_client):
    response = api_client.post("/check", json={})

    assert response.status_code == 422


def test_validate_masks_tokens(api_client):
    response = api_client.post("/validate", json={"text": "what the fuck man"})
    payload = response.json()

    assert response.status_code == 200, response.text
    assert payload["status"] == "fixed"
    assert payload["clean_text"] == "what the **** man"
    assert payload["flagged"][0]["token"] == "fuck"
    assert payload["flagged"][0]["span"] == [9, 13]
    assert payload["reasons"] == ["1 profanities masked."]


def test_validate_without_spans(api_client):
    response = api_client.post(
        "/validate",
        json={"text": "what the fuck", "profanity_action": "remove", "return_spans": False},
    )
    payload = response.json()

    assert payload["clean_text"] == "what the"
    assert payload["flagged"][0]["span"] is None


def test_validate_passes_clean_and_empty_text(api_client):
    clean = api_client.post("/validate", json={"text": "have a nice day"}).json()
    empty = api_client.post("/validate", json={"text": "  "}).json()

    assert clean["status"] == "pass"
    assert clean["reasons"] == ["No profanity detected"]
    assert empty["status"] == "pass"
    assert empty["reasons"] == ["Empty text"]


def test_validate_masks_only_the_flagged_token(api_client):
    payload = api_client.post("/validate", json={"text": "I fuck"}).json()

    assert payload["clean_text"] == "I ****"
    assert payload["flagged"][0]["span"] == [2, 6]


def test_validate_sentence_mode_removes_sentences(api_client, punkt_data):
    response = api_client.post("/validate", json={"text": SENTENCES, "mode": "sentence"})
    payload = response.json()

    assert response.status_code == 200, response.text
    assert payload["status"] == "fixed"
    assert payload["clean_text"] == "This is fine."
    assert payload["flagged"][0]["sentence"] == "What the fuck is this?"
    assert payload["flagged"][0]["token"] == "fuck"
    assert payload["flagged"][0]["span"] == [14, 36]
    assert payload["reasons"] == ["Profane sentences removed."]


def test_validate_sentence_mode_redacts(api_client, punkt_data):
    payload = api_client.post(
        "/validate", json={"text": SENTENCES, "mode": "sentence", "action_on_fail": "redact"}
    ).json()

    assert payload["clean_text"] == "This is fine. [PROFANITY]"
    assert payload["reasons"] == ["Profane sentences redacted."]


def test_validate_sentence_mode_removes_everything(api_client, punkt_data):
    payload = api_client.post(
        "/validate",
        json={"text": SENTENCES, "mode": "sentence", "action_on_fail": "remove_all", "return_spans": False},
    ).json()

    assert payload["clean_text"] == ""
    assert payload["flagged"][0]["span"] is None
    assert payload["reasons"] == ["Profane content removed (entire text)."]


def test_validate_sentence_mode_passes_clean_text(api_client, punkt_data):
    payload = api_client.post(
        "/validate", json={"text": "This is fine. So is this.", "mode": "sentence"}
    ).json()

    assert payload["status"] == "pass"
    assert payload["clean_text"] == "This is fine. So is this."


def test_validate_sentence_mode_without_punkt_data(api_client, monkeypatch):
    def _missing(text):
        raise LookupError("punkt")

    monkeypatch.setattr(utils, "_PUNKT_READY", False)
    monkeypatch.setattr(utils, "sent_tokenize", _missing)
    monkeypatch.setenv("NLTK_AUTO_DOWNLOAD", "0")

    response = api_client.post("/validate", json={"text": "Fine. What the fuck?", "mode": "sentence"})

    assert response.status_code == 503
    assert "punkt" in response.json()["detail"]

def test_api_key_guard(make_client):
    client = make_client(ANTISWEAR_API_KEYS="secret, other")

    assert client.post("/check", json={"text": "x"}).status_code == 401
    assert client.post("/check", json={"text": "x"}, headers={"x-api-key": "nope"}).status_code == 401
    assert client.post("/check", json={"text": "x"}, headers={"x-api-key": "secret"}).status_code == 200
    assert (
        client.post("/check", json={"text": "x"}, headers={"Authorization": "Bearer other"}).status_code
        == 200
    )
    assert client.get("/health").status_code == 200


def test_profile_selection_from_environment(make_client):
    client = make_client(ANTISWEAR_PROFILES="ru")

    assert client.get("/health").json()["profiles"] == ["ru"]
    assert client.post("/check", json={"text": "what the fuck"}).json()["found"] is False
