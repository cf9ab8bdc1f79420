from fastapi import APIRouter

router = APIRouter()


@router.get("")
def health():
    """Liveness probe. Always ok; does not touch the model or the event store."""
    return {"ok": True}
