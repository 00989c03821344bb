"""
Expo push gateway client.

Usage:
    from notifications.push_client import ExpoPushClient, PushMessage

    ExpoPushClient.send(PushMessage(to=token, title="Hi", body="There"))
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any

import requests
from django.conf import settings

from notifications.exceptions import NotificationDeliveryError

logger = logging.getLogger(__name__)


@dataclass
class PushMessage:
    """One push message as the Expo gateway expects it."""

    to: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    sound: str = "default"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ExpoPushClient:
    """
    Client for the Expo push API.

    ``send`` raises on failure; ``send_batch`` logs and swallows failures
    so a sweep keeps going after a bad chunk.
    """

    @staticmethod
    def _post(payload: Any) -> dict[str, Any]:
        start_time = time.time()
        try:
            response = requests.post(
                settings.EXPO_PUSH_URL,
                json=payload,
                headers={"Accept": "application/json", "Content-Type": "application/json"},
                timeout=settings.PUSH_API_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            raise NotificationDeliveryError(
                f"Push gateway unreachable: {type(e).__name__}",
                error_code="PUSH_GATEWAY_UNREACHABLE",
            ) from e

        duration_ms = (time.time() - start_time) * 1000
        if response.status_code >= 400:
            raise NotificationDeliveryError(
                f"Push gateway returned {response.status_code}",
                error_code="PUSH_GATEWAY_REJECTED",
                details={"status_code": response.status_code, "body": response.text[:500]},
            )

        logger.debug("Push gateway call completed", extra={"duration_ms": duration_ms})
        try:
            return response.json()
        except ValueError:
            return {}

    @classmethod
    def send(cls, message: PushMessage) -> None:
        """
        Deliver one message.

        Raises:
            NotificationDeliveryError: Gateway unreachable, HTTP error, or a
                ticket with status "error"
        """
        body = cls._post(message.to_dict())
        ticket = body.get("data") or {}
        if isinstance(ticket, list):
            ticket = ticket[0] if ticket else {}
        if ticket.get("status") == "error":
            raise NotificationDeliveryError(
                ticket.get("message") or "Push ticket rejected",
                error_code="PUSH_TICKET_ERROR",
                details={"ticket": ticket.get("details") or {}},
            )

    @classmethod
    def send_batch(cls, messages: list[PushMessage]) -> int:
        """
        Deliver ``messages`` in chunks of PUSH_BATCH_SIZE.

        Returns:
            Number of messages in chunks the gateway accepted
        """
        chunk_size = max(1, settings.PUSH_BATCH_SIZE)
        accepted = 0

        for start in range(0, len(messages), chunk_size):
            chunk = messages[start : start + chunk_size]
            try:
                cls._post([message.to_dict() for message in chunk])
            except NotificationDeliveryError as e:
                logger.warning(
                    f"Push batch failed: {e.message}",
                    extra={"chunk_start": start, "chunk_size": len(chunk), "error_code": e.error_code},
                )
                continue
            accepted += len(chunk)

        return accepted
