"""Simulated email provider used as the default notification sender."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from projectflow_engine.config import Settings, get_settings
from projectflow_engine.log import get_logger

logger = get_logger(__name__)


@dataclass
class EmailPayload:
    to: str
    subject: str
    body: str
    sender: str


class SimulatedEmailProvider:
    """Stands in for a hosted provider: logs the message, keeps it in ``outbox``, reports success."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self.outbox: list[EmailPayload] = []

    def send(self, to: str, subject: str, body: str, sender: Optional[str] = None) -> bool:
        payload = EmailPayload(
            to=to,
            subject=subject,
            body=body,
            sender=sender or self._settings.sender_address,
        )
        if self._settings.send_latency_seconds > 0:
            time.sleep(self._settings.send_latency_seconds)

        self.outbox.append(payload)
        logger.info("Email sent from=%s to=%s subject=%r", payload.sender, payload.to, payload.subject)
        logger.debug("Email body:\n%s", payload.body)
        return True

    __call__ = send
