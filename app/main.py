from __future__ import annotations

import logging
import time

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.intake import intake
from app.mailer import ConfirmationMailer, payment_confirmation
from app.notifier import WebhookNotifier, free_embed, paid_embed
from app.repository import ExpiringStore
from app.schemas import (
    CheckPaymentResponse,
    FinalizeRequest,
    FreeData,
    FreePackRequest,
    PaidData,
    SubmissionRecord,
    SubmissionStatus,
    SuccessResponse,
)
from app.validators import MISSING_FIELDS, require_fields, validate_discord_id

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Payment Notification Relay", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["Content-Type"],
)

paid_store: ExpiringStore[SubmissionRecord] = ExpiringStore(
    ttl_seconds=settings.store_ttl_seconds,
    cancel_on_overwrite=settings.cancel_expiry_on_overwrite,
)
free_store: ExpiringStore[SubmissionRecord] = ExpiringStore(
    ttl_seconds=settings.store_ttl_seconds,
    cancel_on_overwrite=settings.cancel_expiry_on_overwrite,
)
notifier = WebhookNotifier(timeout=settings.webhook_timeout_seconds)
mailer = ConfirmationMailer()


@app.exception_handler(StarletteHTTPException)
async def error_body(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# bodies that fail to parse are reported as missing fields
@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": MISSING_FIELDS})


def _now_ms() -> int:
    return int(time.time() * 1000)


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return settings.health_message


@app.post("/finalize", response_model=SuccessResponse)
async def finalize(req: FinalizeRequest) -> SuccessResponse:
    require_fields(req.name, req.email, req.discord_name, req.discord_id, req.product, req.payment_id)
    try:
        record = SubmissionRecord(
            name=req.name,
            email=req.email,
            discord=req.discord_name,
            discord_id=req.discord_id,
            product=req.product,
            amount=req.amount,
            payment_id=req.payment_id,
            status=SubmissionStatus.PAID,
            created_at=_now_ms(),
        )
        # attempted even when WEBHOOK_PAID is unset; the failure is logged by the notifier
        await intake(
            paid_store,
            record,
            notifier,
            settings.webhook_paid,
            paid_embed(
                record.name,
                record.email,
                record.discord,
                record.discord_id,
                record.product,
                record.amount,
                record.payment_id,
            ),
            attempt_if_unset=True,
        )
        subject, body = payment_confirmation(record.name, record.product, record.payment_id)
        await mailer.send(record.email, subject, body)
    except Exception as exc:
        logger.exception("Finalize error")
        raise HTTPException(status_code=500, detail="finalize_failed") from exc
    return SuccessResponse()


@app.get(
    "/check-payment/{discord_id}",
    response_model=CheckPaymentResponse,
    response_model_exclude_none=True,
)
def check_payment(discord_id: str) -> CheckPaymentResponse:
    record = paid_store.get(discord_id)
    if record:
        return CheckPaymentResponse(
            paid=True,
            type=SubmissionStatus.PAID,
            data=PaidData(
                product=record.product,
                amount=record.amount,
                payment_id=record.payment_id,
                status=record.status,
            ),
        )
    if discord_id in free_store:
        return CheckPaymentResponse(paid=True, type=SubmissionStatus.FREE, data=FreeData())
    return CheckPaymentResponse(paid=False)


@app.post("/freepack", response_model=SuccessResponse)
async def freepack(req: FreePackRequest) -> SuccessResponse:
    discord_id = req.resolved_discord_id
    require_fields(req.name, req.email, req.discord, discord_id)
    validate_discord_id(discord_id)
    try:
        record = SubmissionRecord(
            name=req.name,
            email=req.email,
            discord=req.discord,
            discord_id=discord_id,
            product="FREE PACK",
            status=SubmissionStatus.FREE,
            created_at=_now_ms(),
        )
        await intake(
            free_store,
            record,
            notifier,
            settings.webhook_free,
            free_embed(record.name, record.email, record.discord, record.discord_id),
            attempt_if_unset=False,
        )
    except Exception as exc:
        logger.exception("FreePack error")
        raise HTTPException(status_code=500, detail="freepack_failed") from exc
    return SuccessResponse()


if __name__ == "__main__":
    logger.info("Backend running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
