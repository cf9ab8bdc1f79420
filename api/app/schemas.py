from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class NormalizedRequest:
    """
    Bounded, fully defaulted view of an inbound analyze request.
    - subject/body_text: message fields (body_text at most 12,000 chars)
    - sender_name/sender_email: from the optional sender object
    - links: URLs extracted from the body, at most 30
    - platform: mail client the request came from
    """

    subject: str = ""
    sender_name: str = ""
    sender_email: str = ""
    body_text: str = ""
    links: List[Any] = field(default_factory=list)
    platform: str = "gmail"


class CueOut(BaseModel):
    type: str
    evidence: str
    explanation: str


class AnalysisVerdict(BaseModel):
    """
    Shape the model is asked to return. Responses are passed through as-is,
    so every field is optional and extra keys are kept.
    """

    model_config = ConfigDict(extra="allow")

    risk_score: Optional[float] = Field(default=None, ge=0, le=100)
    verdict: Optional[Literal["safe", "suspicious", "likely_phishing"]] = None
    cues: List[CueOut] = Field(default_factory=list)
    recommended_user_action: List[str] = Field(default_factory=list)


class ErrorOut(BaseModel):
    error: Literal[True] = True
    message: str


# ---- Extraction result: parsed verdict or failure with raw text ----


@dataclass(frozen=True)
class ParsedVerdict:
    data: Dict[str, Any]

    ok: bool = field(default=True, init=False)

    def to_body(self) -> Dict[str, Any]:
        return self.data


@dataclass(frozen=True)
class ExtractionFailure:
    """
    Model output without a parseable JSON object.
    reason: no_json_object when no brace span exists, invalid_json when the
    span did not parse. Only `raw` is sent to callers.
    """

    raw: str
    reason: Literal["no_json_object", "invalid_json"]

    ok: bool = field(default=False, init=False)

    def to_body(self) -> Dict[str, Any]:
        return {"error": True, "raw": self.raw}


ExtractionResult = Union[ParsedVerdict, ExtractionFailure]


class TelemetryEvent(BaseModel):
    """Privacy-minimized record of one analysis. No address or domain in clear."""

    created_at: datetime
    platform: str
    domain_hash: str
    verdict: str = "unknown"
    risk_score: Optional[float] = None
    cue_types: List[Optional[str]] = Field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()
