from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

SideLabel = Literal["red", "black"]
PlayerType = Literal["human", "random"]


class ClickRequest(BaseModel):
    col: int = Field(..., description="Zero-based column of the clicked cell.")
    row: int = Field(..., description="Zero-based row of the clicked cell.")


class PlayerConfigPayload(BaseModel):
    type: Optional[PlayerType] = None
    seed: Optional[int] = None


class ConfigRequest(BaseModel):
    red: Optional[PlayerConfigPayload] = None
    black: Optional[PlayerConfigPayload] = None


class ResetRequest(BaseModel):
    size: Optional[int] = Field(default=None, ge=1, le=26)


class AIMoveRequest(BaseModel):
    side: Optional[SideLabel] = None
