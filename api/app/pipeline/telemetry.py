"""
Privacy-minimized telemetry for completed analyses.

Each analysis yields one event: platform, a SHA-256 of the sender's domain,
the verdict, score and cue types. Raw addresses and domains never reach the
store. Writes are best-effort: failures are logged and swallowed.
"""

import hashlib
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Protocol

from ..schemas import ExtractionResult, TelemetryEvent

logger = logging.getLogger(__name__)

EVENTS_COLLECTION = "events"
MAX_CUE_TYPES = 10


class DocumentStore(Protocol):
    def add(self, collection: str, document: dict) -> None: ...


def sender_domain(email: str) -> str:
    """Text after the last '@', lower-cased and trimmed; '' without '@'."""
    if not email or "@" not in email:
        return ""
    return email.rsplit("@", 1)[1].lower().strip()


def hash_domain(domain: str) -> str:
    return hashlib.sha256((domain or "").encode("utf-8")).hexdigest()


def _risk_score(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _cue_types(cues: Any) -> List[Optional[str]]:
    if not isinstance(cues, list):
        return []
    types = []
    for cue in cues[:MAX_CUE_TYPES]:
        cue_type = cue.get("type") if isinstance(cue, dict) else None
        types.append(cue_type if cue_type is None else str(cue_type))
    return types


def build_event(
    platform: str,
    sender_email: str,
    result: ExtractionResult,
    now: Optional[datetime] = None,
) -> TelemetryEvent:
    data = result.data if result.ok else {}
    return TelemetryEvent(
        created_at=now or datetime.now(timezone.utc),
        platform=platform,
        domain_hash=hash_domain(sender_domain(sender_email)),
        verdict=str(data.get("verdict") or "unknown"),
        risk_score=_risk_score(data.get("risk_score")),
        cue_types=_cue_types(data.get("cues")),
    )


class TelemetryRecorder:
    """Appends one event per analysis; a None store disables recording."""

    def __init__(self, store: Optional[DocumentStore]):
        self.store = store

    @property
    def enabled(self) -> bool:
        return self.store is not None

    def record(self, platform: str, sender_email: str, result: ExtractionResult) -> None:
        if self.store is None:
            return
        try:
            event = build_event(platform, sender_email, result)
            self.store.add(EVENTS_COLLECTION, event.to_document())
        except Exception as e:
            # Don't fail the response if telemetry fails
            logger.warning("Telemetry write failed: %s", e)
