"""
Response models for API endpoints
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Optional, Dict, List
from datetime import datetime


class BaseResponse(BaseModel):
    """Base response model"""
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseResponse):
    """Error response model"""
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    timestamp: datetime
    version: str
    environment: str
    checks: Dict[str, Any]


class VerificationResult(BaseModel):
    """Outcome of a provider lookup, built fresh for every call"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    valid: bool
    legal_name: Optional[str] = None
    trade_name: Optional[str] = None
    state_code: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None
    code: Optional[str] = None
    status_code: Optional[int] = None
    raw: Optional[Any] = None


class GSTValidationResult(BaseModel):
    """Local GSTIN validation result model"""
    gstin: str
    normalized: str
    is_valid: bool
    format_valid: bool
    checksum_valid: bool
    expected_check_character: Optional[str] = None
    state_code: Optional[str] = None
    state_name: Optional[str] = None
    pan: Optional[str] = None
    entity_code: Optional[str] = None
    errors: List[str] = []
    warnings: List[str] = []


class GSTVerifyResponse(BaseModel):
    """Body returned by the verify endpoint"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    valid: bool
    legal_name: Optional[str] = None
    trade_name: Optional[str] = None
    state_code: Optional[str] = None
    status: Optional[str] = None
    provider_status: Optional[str] = None
    error: Optional[str] = None
    code: Optional[str] = None
