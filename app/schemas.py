from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


Amount = str | int | float


class SubmissionStatus(str, Enum):
    PAID = "PAID"
    FREE = "FREE"


class FinalizeRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    discord_name: str | None = None
    discord_id: str | None = None
    product: str | None = None
    amount: Amount | None = None
    payment_id: str | None = None


class FreePackRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    discord: str | None = None
    discordId: str | None = None
    discord_id: str | None = None

    @property
    def resolved_discord_id(self) -> str | None:
        return self.discordId or self.discord_id


class SubmissionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    discord: str
    discord_id: str
    product: str
    status: SubmissionStatus
    created_at: int
    amount: Amount | None = None
    payment_id: str | None = None


class SuccessResponse(BaseModel):
    success: Literal[True] = True


class ErrorResponse(BaseModel):
    error: str


class PaidData(BaseModel):
    product: str
    amount: Amount | None = None
    payment_id: str | None = None
    status: SubmissionStatus


class FreeData(BaseModel):
    product: Literal["FREE PACK"] = "FREE PACK"
    status: Literal[SubmissionStatus.FREE] = SubmissionStatus.FREE


class CheckPaymentResponse(BaseModel):
    paid: bool
    type: SubmissionStatus | None = None
    data: PaidData | FreeData | None = Field(default=None)
