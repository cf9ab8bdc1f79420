from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends

from ..pipeline.orchestrator import Analyzer
from ..schemas import AnalysisVerdict, ErrorOut
from .deps import get_analyzer, require_secret


router = APIRouter()


@router.post(
    "/analyze",
    dependencies=[Depends(require_secret)],
    responses={
        200: {
            "model": AnalysisVerdict,
            "description": "Model verdict, or {\"error\": true, \"raw\": ...} when it could not be parsed",
        },
        401: {"description": "Missing or wrong x-teger-secret header"},
        500: {"model": ErrorOut},
    },
)
def analyze(
    background_tasks: BackgroundTasks,
    payload: Any = Body(default=None),
    analyzer: Analyzer = Depends(get_analyzer),
) -> dict:
    """
    Phishing / social-engineering risk judgment for one message.

    Request fields (all optional, see AnalysisRequest):
    - `subject`, `sender {name, email}`, `body_text`, `links`, `platform`

    Body text is cut to 12,000 characters and links to 30 entries before the
    model sees them. Malformed fields fall back to defaults; they never cause
    a 4xx.

    Returns:
    - 200 with the model's JSON verdict verbatim
      (`risk_score`, `verdict`, `cues`, `recommended_user_action`)
    - 200 with `{"error": true, "raw": "..."}` when the model answer holds no
      parseable JSON object
    - 500 with `{"error": true, "message": "..."}` when the model call fails

    A privacy-minimized telemetry event is written after the response is
    sent; its failure never changes the response.
    """
    result = analyzer.analyze(payload, defer=background_tasks.add_task)
    return result.to_body()
