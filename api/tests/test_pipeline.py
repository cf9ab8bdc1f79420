import json

import pytest

from app.pipeline.orchestrator import AnalysisError, Analyzer
from app.pipeline.telemetry import TelemetryRecorder, hash_domain
from app.schemas import ExtractionFailure
from conftest import FakeModel, FakeStore, run_now

SCENARIO_A_REQUEST = {
    "subject": "Urgent: wire transfer",
    "sender": {"email": "ceo@corp-finance.com"},
    "body_text": "Please process payment immediately, reply with confirmation.",
    "links": [],
}
SCENARIO_A_VERDICT = {
    "risk_score": 88,
    "verdict": "likely_phishing",
    "cues": [{"type": "urgency", "evidence": "immediately", "explanation": "..."}],
    "recommended_user_action": ["Verify via phone"],
}


def _analyzer(model, store):
    return Analyzer(model=model, recorder=TelemetryRecorder(store), model_name="test-model")


def test_scenario_a_parsed_verdict_and_telemetry():
    model = FakeModel(text="Analysis:\n" + json.dumps(SCENARIO_A_VERDICT) + "\nDone.")
    store = FakeStore()

    result = _analyzer(model, store).analyze(SCENARIO_A_REQUEST, defer=run_now)

    assert result.ok
    assert result.to_body() == SCENARIO_A_VERDICT

    name, prompt = model.calls[0]
    assert name == "test-model"
    assert "Subject: Urgent: wire transfer" in prompt

    [(_, event)] = store.documents
    assert event["domain_hash"] == hash_domain("corp-finance.com")
    assert event["verdict"] == "likely_phishing"
    assert event["risk_score"] == 88
    assert event["cue_types"] == ["urgency"]
    assert event["platform"] == "gmail"


def test_scenario_b_prose_answer():
    prose = "I cannot determine a verdict for this message."
    store = FakeStore()

    result = _analyzer(FakeModel(text=prose), store).analyze(SCENARIO_A_REQUEST, defer=run_now)

    assert isinstance(result, ExtractionFailure)
    assert result.to_body() == {"error": True, "raw": prose}
    [(_, event)] = store.documents
    assert event["verdict"] == "unknown"
    assert event["risk_score"] is None
    assert event["cue_types"] == []


def test_scenario_c_model_failure_raises_and_skips_telemetry():
    store = FakeStore()
    analyzer = _analyzer(FakeModel(error=ConnectionError("connection reset by peer")), store)

    with pytest.raises(AnalysisError) as exc_info:
        analyzer.analyze(SCENARIO_A_REQUEST, defer=run_now)

    assert exc_info.value.message == "connection reset by peer"
    assert store.documents == []


def test_empty_error_message_falls_back_to_class_name():
    analyzer = _analyzer(FakeModel(error=TimeoutError()), FakeStore())
    with pytest.raises(AnalysisError) as exc_info:
        analyzer.analyze({}, defer=run_now)
    assert exc_info.value.message == "TimeoutError"


def test_telemetry_failure_does_not_change_result():
    analyzer = _analyzer(FakeModel(text=json.dumps(SCENARIO_A_VERDICT)), FakeStore(error=RuntimeError("down")))
    result = analyzer.analyze(SCENARIO_A_REQUEST, defer=run_now)
    assert result.to_body() == SCENARIO_A_VERDICT


def test_telemetry_is_deferred_not_run_inline():
    scheduled = []
    store = FakeStore()
    analyzer = _analyzer(FakeModel(text="{}"), store)

    analyzer.analyze({}, defer=lambda fn, *args: scheduled.append((fn, args)))

    assert store.documents == []
    assert len(scheduled) == 1
    fn, args = scheduled[0]
    fn(*args)
    assert len(store.documents) == 1


def test_disabled_telemetry_schedules_nothing():
    scheduled = []
    analyzer = _analyzer(FakeModel(text="{}"), None)
    analyzer.analyze({}, defer=lambda fn, *args: scheduled.append(fn))
    assert scheduled == []


def test_custom_extractor_is_used():
    analyzer = Analyzer(
        model=FakeModel(text="anything"),
        recorder=TelemetryRecorder(None),
        model_name="m",
        extractor=lambda text: ExtractionFailure(raw=text.upper(), reason="invalid_json"),
    )
    assert analyzer.analyze({}, defer=run_now).to_body() == {"error": True, "raw": "ANYTHING"}
