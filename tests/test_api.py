"""
Tests for the REST surface: conversations, bot responses, settings, stats, intents.
"""

from __future__ import annotations

from mobichat.application.utils.intent_resolver import UNKNOWN_REPLIES
from mobichat.domain.entities.language import Language


def _new_bot_response(**overrides):
    body = {
        "intent": "roaming",
        "keywords": ["roaming", "تجوال"],
        "response_ar": "خدمة التجوال متاحة",
        "response_fr": "Le roaming est disponible",
        "category": "plans",
    }
    body.update(overrides)
    return body


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_and_fetch_conversation(client):
    resp = client.post("/api/conversations", json={"user_id": "web-1", "platform": "web"})
    assert resp.status_code == 201
    created = resp.json()
    assert created["messages"] == []
    assert created["is_active"] is True

    fetched = client.get("/api/conversations/web-1")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == created["id"]


def test_unknown_user_has_no_conversation(client):
    resp = client.get("/api/conversations/nobody")
    assert resp.status_code == 200
    assert resp.json() is None


def test_post_user_message_returns_bot_reply(client):
    conversation = client.post("/api/conversations", json={"user_id": "web-1", "platform": "web"}).json()

    resp = client.post(
        f"/api/conversations/{conversation['id']}/messages",
        json={"text": "quel est mon solde", "sender": "user", "language": "fr"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"]["text"] == "quel est mon solde"
    assert body["bot_response"]["sender"] == "bot"
    assert "*555#" in body["bot_response"]["text"]
    assert body["bot_response"]["language"] == "fr"

    stored = client.get("/api/conversations/web-1").json()
    assert len(stored["messages"]) == 2


def test_post_unknown_message_returns_unknown_reply(client):
    conversation = client.post("/api/conversations", json={"user_id": "web-1", "platform": "web"}).json()

    resp = client.post(
        f"/api/conversations/{conversation['id']}/messages",
        json={"text": "hi", "sender": "user", "language": "ar"},
    )

    assert resp.json()["bot_response"]["text"] == UNKNOWN_REPLIES[Language.ar]


def test_post_message_to_missing_conversation_is_404(client):
    resp = client.post("/api/conversations/missing/messages", json={"text": "solde", "sender": "user"})
    assert resp.status_code == 404


def test_list_bot_responses_returns_default_catalog(client):
    resp = client.get("/api/bot-responses")
    assert resp.status_code == 200
    intents = [item["intent"] for item in resp.json()]
    assert intents == ["balance_inquiry", "recharge", "plans", "support", "greeting"]


def test_new_bot_response_is_used_for_classification(client):
    resp = client.post("/api/bot-responses", json=_new_bot_response())
    assert resp.status_code == 201
    assert resp.json()["is_active"] is True

    analyzed = client.post("/api/analyze-intent", json={"text": "roaming"}).json()
    assert analyzed == {"intent": "roaming", "confidence": 1.0, "category": "plans"}


def test_bot_response_validation_errors(client):
    assert client.post("/api/bot-responses", json=_new_bot_response(response_ar="")).status_code == 400
    assert client.post("/api/bot-responses", json=_new_bot_response(intent="greeting")).status_code == 400
    assert client.post("/api/bot-responses", json=_new_bot_response(category="weather")).status_code == 422


def test_update_and_delete_bot_response(client):
    created = client.post("/api/bot-responses", json=_new_bot_response()).json()

    resp = client.put(f"/api/bot-responses/{created['id']}", json={"response_fr": "Roaming activé"})
    assert resp.status_code == 200
    assert resp.json()["response_fr"] == "Roaming activé"
    assert resp.json()["response_ar"] == created["response_ar"]

    assert client.delete(f"/api/bot-responses/{created['id']}").status_code == 204
    assert client.delete(f"/api/bot-responses/{created['id']}").status_code == 404
    assert client.put(f"/api/bot-responses/{created['id']}", json={"is_active": False}).status_code == 404


def test_deactivated_bot_response_stops_matching(client):
    created = client.post("/api/bot-responses", json=_new_bot_response()).json()
    client.put(f"/api/bot-responses/{created['id']}", json={"is_active": False})

    analyzed = client.post("/api/analyze-intent", json={"text": "roaming"}).json()
    assert analyzed["intent"] == "unknown"
    assert analyzed["confidence"] == 0


def test_facebook_settings_round_trip(client):
    assert client.get("/api/facebook-settings").json() is None

    resp = client.post(
        "/api/facebook-settings",
        json={"page_access_token": "page-token", "verify_token": "verify-me", "is_active": True},
    )
    assert resp.status_code == 200

    stored = client.get("/api/facebook-settings").json()
    assert stored["id"] == resp.json()["id"]
    assert stored["verify_token"] == "verify-me"
    assert stored["is_active"] is True


def test_today_stats_follow_activity(client):
    assert client.get("/api/stats/today").json() is None

    conversation = client.post("/api/conversations", json={"user_id": "web-1", "platform": "web"}).json()
    client.post(
        f"/api/conversations/{conversation['id']}/messages",
        json={"text": "رصيد", "sender": "user", "language": "ar"},
    )

    stats = client.get("/api/stats/today").json()
    assert stats["total_conversations"] == 1
    assert stats["bot_replies"] == 1
    assert stats["resolved_queries"] == 1
    assert stats["balance_inquiries"] == 1
    assert stats["average_responses"] == 1.0

    assert client.get(f"/api/stats/{stats['date']}").json()["id"] == stats["id"]


def test_stats_for_quiet_day_is_null(client):
    resp = client.get("/api/stats/2000-01-01")
    assert resp.status_code == 200
    assert resp.json() is None


def test_analyze_intent_unknown_text(client):
    resp = client.post("/api/analyze-intent", json={"text": "   "})
    assert resp.json() == {"intent": "unknown", "confidence": 0.0, "category": "general"}
