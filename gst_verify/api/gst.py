"""
GST verification API endpoints
"""
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Any, Dict, Optional
import logging

from ..models.base import VerificationErrorCode, VerificationStatus
from ..models.responses import GSTValidationResult, GSTVerifyResponse
from ..services.gst_verification import GSTVerificationClient, MISSING_KEY_MESSAGE
from ..services.gstin import inspect_gstin
from ..config import settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/gst", tags=["gst"])


class GSTINRequest(BaseModel):

    gstin: Optional[str] = ""


# Bodies are read by hand so that a wrong type or broken JSON is reported
# as an invalid GSTIN rather than a 422
GSTIN_REQUEST_BODY: Dict[str, Any] = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": GSTINRequest.model_json_schema()}},
    }
}


async def _read_gstin(request: Request) -> str:
    try:
        body = await request.json()
    except ValueError:
        logger.info("GST request body is not valid JSON")
        body = {}
    if not isinstance(body, dict):
        body = {}
    return str(body.get("gstin") or "")


def _response(body: GSTVerifyResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.post(
    "/verify",
    response_model=GSTVerifyResponse,
    response_model_exclude_none=True,
    openapi_extra=GSTIN_REQUEST_BODY,
)
async def verify_gst(request: Request):
    if not settings.GST_VERIFICATION_ENABLED:
        raise HTTPException(status_code=503, detail="GST verification is currently disabled")

    gstin = await _read_gstin(request)

    try:
        client = GSTVerificationClient()
        result = await client.verify(gstin)

        if result.status == VerificationStatus.INVALID_GSTIN.value:
            return _response(GSTVerifyResponse(valid=False, error=result.message))

        if result.status == VerificationStatus.MISSING_PROVIDER_KEY.value:
            return _response(
                GSTVerifyResponse(
                    success=False,
                    valid=False,
                    error=result.message or MISSING_KEY_MESSAGE,
                    code=result.code or VerificationErrorCode.MISSING_GST_API_KEY.value,
                ),
                status_code=503,
            )

        if not result.valid:
            return _response(
                GSTVerifyResponse(
                    valid=False,
                    error=result.message or "GST could not be verified. Please check and try again.",
                    provider_status=result.status,
                )
            )

        return _response(
            GSTVerifyResponse(
                valid=True,
                legal_name=result.legal_name,
                trade_name=result.trade_name,
                state_code=result.state_code,
                status=result.status,
            )
        )
    except Exception as e:
        logger.error(f"GST verification error for {gstin!r}: {e}")
        return _response(
            GSTVerifyResponse(success=False, valid=False, error="Unexpected server error"),
            status_code=500,
        )


@router.post("/validate", response_model=GSTValidationResult, openapi_extra=GSTIN_REQUEST_BODY)
async def validate_gst(request: Request):
    """Local format and checksum check, never calls the provider"""
    gstin = await _read_gstin(request)
    return GSTValidationResult(**inspect_gstin(gstin))


@router.get("/health")
async def gst_health_check():

    return {
        "service": "gst_verification",
        "status": "healthy" if settings.GST_VERIFICATION_ENABLED else "disabled",
        "provider_configured": bool(settings.gst_provider_key),
        "provider_url": settings.GST_PROVIDER_URL,
    }
