"""
Analysis orchestration.

normalize -> prompt -> model -> extract, then the result goes back to the
caller while telemetry is handed off to run independently. Only a model
failure fails the request; telemetry outcomes never reach the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from ..ai_service.service import TextModel
from ..schemas import ExtractionResult
from .extract import Extractor, extract_verdict
from .normalize import normalize_request
from .prompt import build_prompt
from .telemetry import TelemetryRecorder

logger = logging.getLogger(__name__)

# Schedules fn(*args) without waiting for it, e.g. BackgroundTasks.add_task.
Defer = Callable[..., Any]


class AnalysisError(Exception):
    """The model call failed; no verdict could be produced."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _error_message(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


class Analyzer:
    def __init__(
        self,
        model: TextModel,
        recorder: TelemetryRecorder,
        model_name: str,
        extractor: Extractor = extract_verdict,
    ):
        self.model = model
        self.recorder = recorder
        self.model_name = model_name
        self.extractor = extractor

    def analyze(self, payload: Any, defer: Defer) -> ExtractionResult:
        """
        Run one analysis. Returns a ParsedVerdict or ExtractionFailure;
        raises AnalysisError when the model backend fails.

        Telemetry is handed to `defer` and never awaited here.
        """
        req = normalize_request(payload)
        prompt = build_prompt(req)

        try:
            text = self.model.generate(self.model_name, prompt)
        except Exception as e:
            logger.warning("Model call failed: %s", _error_message(e))
            raise AnalysisError(_error_message(e)) from e

        result = self.extractor(text)
        if not result.ok:
            logger.info("Model output had no parseable verdict (%s)", result.reason)

        if self.recorder.enabled:
            defer(self.recorder.record, req.platform, req.sender_email, result)
        return result
