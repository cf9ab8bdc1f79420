"""
Input normalization for the analyze endpoint.

Callers are untrusted and payloads arrive as arbitrary JSON. Every field is
defaulted and the two unbounded fields (body text, links) are capped so the
prompt sent to the model has a bounded size. Normalization never raises.
"""

from typing import Any, List, Mapping

from ..schemas import NormalizedRequest

MAX_BODY_CHARS = 12000
MAX_LINKS = 30
DEFAULT_PLATFORM = "gmail"


def _text(value: Any) -> str:
    # Falsy values (None, 0, False, "") fall back to the default
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _links(value: Any) -> List[Any]:
    # Items stay JSON values; the prompt serializes them as a JSON array.
    if not isinstance(value, list):
        return []
    return list(value[:MAX_LINKS])


def normalize_request(payload: Any) -> NormalizedRequest:
    """Return bounded, default-filled fields for any payload shape."""
    if not isinstance(payload, Mapping):
        payload = {}
    sender = payload.get("sender")
    if not isinstance(sender, Mapping):
        sender = {}

    body = payload.get("body_text")
    if body is None:
        body = payload.get("bodyText")

    return NormalizedRequest(
        subject=_text(payload.get("subject")),
        sender_name=_text(sender.get("name")),
        sender_email=_text(sender.get("email")),
        body_text=_text(body)[:MAX_BODY_CHARS],
        links=_links(payload.get("links")),
        platform=_text(payload.get("platform")) or DEFAULT_PLATFORM,
    )
