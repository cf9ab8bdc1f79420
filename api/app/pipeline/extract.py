"""
Verdict extraction from free-form model output.

Models often wrap the requested JSON in prose or markdown fences. We take the
span from the first "{" to the last "}" and parse it. This tolerates leading
and trailing commentary and nested objects, but a stray brace in surrounding
prose will make the span unparseable. That trade-off is accepted: the result
is then a tagged failure carrying the full text, never an exception.

No schema validation happens here; a parsed object missing `verdict` or
`risk_score` is returned unchanged.
"""

import json
import math
from typing import Any, Callable

from ..schemas import ExtractionFailure, ExtractionResult, ParsedVerdict

Extractor = Callable[[str], ExtractionResult]


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid JSON constant: {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if math.isinf(value):
        raise ValueError(f"number out of range: {literal}")
    return value


def extract_verdict(text: str) -> ExtractionResult:
    text = text or ""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1:
        return ExtractionFailure(raw=text, reason="no_json_object")

    try:
        data = json.loads(text[start : end + 1], parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        return ExtractionFailure(raw=text, reason="invalid_json")

    # A span starting with "{" and ending with "}" only parses to an object,
    # but keep the guard so the success variant always carries a dict.
    if not isinstance(data, dict):
        return ExtractionFailure(raw=text, reason="invalid_json")
    return ParsedVerdict(data=data)
