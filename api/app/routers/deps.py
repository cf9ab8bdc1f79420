import secrets
from typing import Optional

from fastapi import Depends, Header, Request

from ..config import Settings
from ..pipeline.orchestrator import Analyzer

SECRET_HEADER = "x-teger-secret"


class UnauthorizedError(Exception):
    pass


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_analyzer(request: Request) -> Analyzer:
    return request.app.state.analyzer


def require_secret(
    settings: Settings = Depends(get_settings),
    x_teger_secret: Optional[str] = Header(default=None, alias=SECRET_HEADER),
) -> None:
    """Shared-secret gate. An unset secret lets every request through."""
    expected = settings.shared_secret
    if not expected:
        return
    if x_teger_secret is None or not secrets.compare_digest(
        x_teger_secret.encode("utf-8"), expected.encode("utf-8")
    ):
        raise UnauthorizedError()
