"""Ask and health routes."""

from fastapi import APIRouter

from ...models import AskRequest
from ..app import require_app
from ..models import AskRequestModel

router = APIRouter()


@router.post("/ask")
async def ask(req: AskRequestModel):
    app = require_app()
    result = await app.ask(AskRequest.from_raw(req.model_dump(by_alias=False)))
    return result.to_dict()


@router.get("/health")
async def health():
    return {"status": "ok"}
