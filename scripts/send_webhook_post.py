#!/usr/bin/env python3
from __future__ import annotations

import argparse
import hashlib
import hmac
import json
import time
from typing import Any

import httpx
from httpx import ConnectError


def build_event(sender_id: str, page_id: str, text: str, postback: bool = False) -> dict[str, Any]:
    now_ms = int(time.time() * 1000)
    event: dict[str, Any] = {
        "sender": {"id": sender_id},
        "recipient": {"id": page_id},
        "timestamp": now_ms,
    }
    if postback:
        event["postback"] = {"title": text, "payload": text}
    else:
        event["message"] = {"mid": f"m_{now_ms}", "text": text}
    return {
        "object": "page",
        "entry": [{"id": page_id, "time": now_ms, "messaging": [event]}],
    }


def sign_body(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a test Messenger webhook event to a local server")
    parser.add_argument("--url", default="http://127.0.0.1:8001/webhook/messenger")
    parser.add_argument("--sender", default="psid_123")
    parser.add_argument("--page", default="page_456")
    parser.add_argument("--text", default="quel est mon solde")
    parser.add_argument("--postback", action="store_true", help="Send the text as a postback payload")
    parser.add_argument("--app-secret", default="", help="Meta app secret for signature")
    parser.add_argument("--verify-token", default="", help="Run the GET subscription handshake instead")
    args = parser.parse_args()

    try:
        if args.verify_token:
            params = {"hub.mode": "subscribe", "hub.verify_token": args.verify_token, "hub.challenge": "challenge_ok"}
            resp = httpx.get(args.url, params=params, timeout=10.0)
        else:
            body = json.dumps(build_event(args.sender, args.page, args.text, args.postback)).encode("utf-8")
            headers = {"Content-Type": "application/json"}
            if args.app_secret:
                headers["X-Hub-Signature-256"] = sign_body(args.app_secret, body)
            resp = httpx.post(args.url, content=body, headers=headers, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn mobichat.main:app --reload --port 8001")
        return

    print(resp.status_code)
    if resp.text:
        print(resp.text)


if __name__ == "__main__":
    main()
