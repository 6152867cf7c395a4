"""Tests for the Messenger webhook endpoints."""

import json
from collections.abc import AsyncIterator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from cardfetcher.api.dependencies import get_pipeline, get_settings
from cardfetcher.api.security import compute_signature, is_valid_signature
from cardfetcher.config import Settings
from cardfetcher.main import app

APP_SECRET = "test-secret"


class RecordingPipeline:
    """Stands in for QueryPipeline and remembers what it was asked."""

    def __init__(self) -> None:
        self.handled: list[tuple[str, str]] = []

    async def handle(self, sender_id: str, raw_text: str) -> None:
        self.handled.append((sender_id, raw_text))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        app_secret=APP_SECRET,
        validation_token="verify-me",
        page_access_token="page-token",
    )


@pytest.fixture
def pipeline() -> RecordingPipeline:
    return RecordingPipeline()


@pytest.fixture
async def client(
    test_settings: Settings, pipeline: RecordingPipeline
) -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def signed_post_kwargs(body: dict[str, Any], secret: str = APP_SECRET) -> dict[str, Any]:
    content = json.dumps(body).encode("utf-8")
    return {
        "content": content,
        "headers": {
            "Content-Type": "application/json",
            "X-Hub-Signature": f"sha1={compute_signature(secret, content)}",
        },
    }


def page_event(*messaging: dict[str, Any]) -> dict[str, Any]:
    return {
        "object": "page",
        "entry": [{"id": "page-1", "time": 1500000000, "messaging": list(messaging)}],
    }


def text_event(sender: str, text: str) -> dict[str, Any]:
    return {
        "sender": {"id": sender},
        "recipient": {"id": "page-1"},
        "timestamp": 1500000000,
        "message": {"mid": "mid.1", "text": text},
    }


def postback_event(sender: str, payload: str) -> dict[str, Any]:
    return {
        "sender": {"id": sender},
        "recipient": {"id": "page-1"},
        "timestamp": 1500000000,
        "postback": {"title": "More", "payload": payload},
    }


class TestVerifySubscription:
    async def test_returns_challenge(self, client: AsyncClient) -> None:
        response = await client.get(
            "/webhook",
            params={
                "hub.mode": "subscribe",
                "hub.verify_token": "verify-me",
                "hub.challenge": "1158201444",
            },
        )

        assert response.status_code == 200
        assert response.text == "1158201444"

    async def test_wrong_token_is_forbidden(self, client: AsyncClient) -> None:
        response = await client.get(
            "/webhook",
            params={"hub.mode": "subscribe", "hub.verify_token": "nope", "hub.challenge": "1"},
        )

        assert response.status_code == 403

    async def test_wrong_mode_is_forbidden(self, client: AsyncClient) -> None:
        response = await client.get(
            "/webhook",
            params={"hub.mode": "unsubscribe", "hub.verify_token": "verify-me"},
        )

        assert response.status_code == 403


class TestSignatureGate:
    def test_valid_signature(self) -> None:
        body = b'{"object": "page"}'
        signature = f"sha1={compute_signature(APP_SECRET, body)}"

        assert is_valid_signature(APP_SECRET, body, signature)

    def test_other_method_is_invalid(self) -> None:
        body = b'{"object": "page"}'
        signature = f"sha256={compute_signature(APP_SECRET, body)}"

        assert not is_valid_signature(APP_SECRET, body, signature)

    def test_tampered_body_is_invalid(self) -> None:
        signature = f"sha1={compute_signature(APP_SECRET, b'original')}"

        assert not is_valid_signature(APP_SECRET, b"tampered", signature)

    async def test_missing_signature_is_forbidden(
        self, client: AsyncClient, pipeline: RecordingPipeline
    ) -> None:
        response = await client.post("/webhook", json=page_event(text_event("42", "Bolt")))

        assert response.status_code == 403
        assert pipeline.handled == []

    async def test_wrong_secret_is_forbidden(
        self, client: AsyncClient, pipeline: RecordingPipeline
    ) -> None:
        body = page_event(text_event("42", "Bolt"))

        response = await client.post("/webhook", **signed_post_kwargs(body, secret="other"))

        assert response.status_code == 403
        assert pipeline.handled == []


class TestReceiveEvents:
    async def test_text_message_is_queued(
        self, client: AsyncClient, pipeline: RecordingPipeline
    ) -> None:
        body = page_event(text_event("42", "Lightning Bolt"))

        response = await client.post("/webhook", **signed_post_kwargs(body))

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "queued": 1}
        assert pipeline.handled == [("42", "Lightning Bolt")]

    async def test_postback_payload_is_queued(
        self, client: AsyncClient, pipeline: RecordingPipeline
    ) -> None:
        body = page_event(postback_event("42", "Bolt#1"))

        await client.post("/webhook", **signed_post_kwargs(body))

        assert pipeline.handled == [("42", "Bolt#1")]

    async def test_batched_events_keep_order(
        self, client: AsyncClient, pipeline: RecordingPipeline
    ) -> None:
        body = page_event(text_event("1", "Shock"), postback_event("2", "Lightning Axe"))

        response = await client.post("/webhook", **signed_post_kwargs(body))

        assert response.json()["queued"] == 2
        assert pipeline.handled == [("1", "Shock"), ("2", "Lightning Axe")]

    async def test_unused_events_are_ignored(
        self, client: AsyncClient, pipeline: RecordingPipeline
    ) -> None:
        attachment = {
            "sender": {"id": "42"},
            "message": {"mid": "mid.2", "attachments": [{"type": "image"}]},
        }
        echo = {
            "sender": {"id": "page-1"},
            "message": {"mid": "mid.3", "text": "Bolt was not found", "is_echo": True},
        }
        read = {"sender": {"id": "42"}, "read": {"watermark": 1500000000}}
        body = page_event(attachment, echo, read)

        response = await client.post("/webhook", **signed_post_kwargs(body))

        assert response.status_code == 200
        assert response.json()["queued"] == 0
        assert pipeline.handled == []

    async def test_non_page_object_is_rejected(
        self, client: AsyncClient, pipeline: RecordingPipeline
    ) -> None:
        body = {"object": "instagram", "entry": []}

        response = await client.post("/webhook", **signed_post_kwargs(body))

        assert response.status_code == 404
        assert pipeline.handled == []
