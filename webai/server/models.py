"""Pydantic request models for the WebAI API."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class HistoryTurnModel(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    ts: Optional[float] = None


class AskRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: str
    history: List[HistoryTurnModel] = Field(default_factory=list)
    user_id: Optional[str] = Field(default=None, alias="userId")
    tool_ids: Optional[List[str]] = Field(default=None, alias="toolIds")
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    stream: Optional[bool] = None
