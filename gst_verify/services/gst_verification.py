"""
GST Verification Service - confirms GSTIN registration with the AppyFlow provider
"""
from typing import Any, List, Mapping, Optional
import asyncio
import logging

import aiohttp

from ..config import settings
from ..models.base import VerificationErrorCode, VerificationStatus
from ..models.responses import VerificationResult
from ..utils.payload import as_text, dig, first_mapping, first_present
from .gstin import (
    CHECKSUM_ERROR_MESSAGE,
    FORMAT_ERROR_MESSAGE,
    GSTIN,
    is_valid_gstin_checksum,
    is_valid_gstin_format,
    normalize_gstin,
)

logger = logging.getLogger(__name__)

# The provider accepts the secret as key_secret on some accounts and key on others
KEY_PARAM_NAMES = ("key_secret", "key")

# Payload shapes seen from the provider:
#   {"taxpayerInfo": {"lgnm", "tradeNam", "sts", "pradr": {"stcd"}}, "success": true}
#   {"gstinInfo": {...}, "valid": true}
#   {"data": {...}, "flag": true}
#   {"valid": true, "message": "..."}
INFO_BLOCK_KEYS = ("taxpayerInfo", "gstinInfo", "data")
LEGAL_NAME_KEYS = ("lgnm", "legalName", "legal_name", "lgnmName", "organizationName")
TRADE_NAME_KEYS = ("tradeNam", "tradeName")
STATE_CODE_KEYS = ("pradr.stcd", "stateCode", "stcd")
STATUS_KEYS = ("sts", "status")
MESSAGE_KEYS = ("message", "Message", "error", "Error")
PROVIDER_FLAG_KEYS = ("valid", "Valid", "isvalid", "isValid", "flag", "success")

NEGATIVE_STATUS_MARKERS = ("cancel", "inactive", "surrender")

MISSING_KEY_MESSAGE = "GST verification service not configured. Please set GST_APPYFLOW_KEY."
UNREACHABLE_MESSAGE = "Unable to reach GST verification provider"

# Marks "use GST_PROVIDER_TIMEOUT_SECONDS", since None means no timeout
CONFIGURED_TIMEOUT = object()


def _provider_flags(data: Mapping, info: Mapping) -> List[bool]:
    flags = [bool(dig(data, key)) for key in PROVIDER_FLAG_KEYS]
    flags.append(str(dig(data, "status")).lower() == "success")
    flags.append(str(dig(info, "valid")).lower() == "true")
    flags.append(str(dig(info, "isValid")).lower() == "true")
    return flags


def infer_validity(
    data: Mapping,
    info: Mapping,
    status_text: Optional[str],
    legal_name: Optional[str] = None,
    trade_name: Optional[str] = None,
) -> bool:
    """
    Decide whether the provider considers the registration valid.

    A status mentioning cancellation, inactivity or surrender always wins;
    otherwise an "active" status is valid. Without a usable status, any
    provider flag or a returned legal/trade name counts as valid.
    """
    status_lower = (status_text or "").lower()
    if status_lower:
        if any(marker in status_lower for marker in NEGATIVE_STATUS_MARKERS):
            return False
        if "active" in status_lower:
            return True

    return any(_provider_flags(data, info)) or bool(legal_name or trade_name)


def parse_provider_payload(payload: Any, status_code: Optional[int] = None) -> VerificationResult:
    """Normalize a provider response body into a VerificationResult"""
    data = payload if isinstance(payload, Mapping) else {}
    info = first_mapping(data, INFO_BLOCK_KEYS) or data

    legal_name = as_text(first_present(info, LEGAL_NAME_KEYS))
    trade_name = as_text(first_present(info, TRADE_NAME_KEYS))
    state_code = as_text(first_present(info, STATE_CODE_KEYS))
    status_text = as_text(first_present(info, STATUS_KEYS) or dig(data, "status"))

    valid = infer_validity(data, info, status_text, legal_name, trade_name)

    message = as_text(first_present(data, MESSAGE_KEYS))
    if message is None:
        message = "GST verified" if valid else "GST not verified"

    return VerificationResult(
        valid=valid,
        legal_name=legal_name,
        trade_name=trade_name,
        state_code=state_code,
        status=status_text,
        message=message,
        status_code=status_code,
        raw=payload,
    )


class GSTVerificationClient:
    """Verifies GSTINs against the configured provider"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        provider_url: Optional[str] = None,
        timeout_seconds: Any = CONFIGURED_TIMEOUT,
    ):
        """
        Args:
            api_key: Provider secret, defaults to GST_APPYFLOW_KEY / GST_APPYFLOW_KEY_SECRET
            provider_url: verifyGST endpoint, defaults to GST_PROVIDER_URL
            timeout_seconds: Total timeout per request. Defaults to
                GST_PROVIDER_TIMEOUT_SECONDS; pass None to disable it and apply
                your own cancellation around verify().
        """
        self.api_key = api_key if api_key is not None else settings.gst_provider_key
        self.provider_url = provider_url or settings.GST_PROVIDER_URL
        if timeout_seconds is CONFIGURED_TIMEOUT:
            timeout_seconds = settings.GST_PROVIDER_TIMEOUT_SECONDS
        self.timeout_seconds = timeout_seconds

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def verify(self, gstin_raw: Optional[str]) -> VerificationResult:
        """Validate locally, then confirm registration status with the provider"""
        gstin = normalize_gstin(gstin_raw)

        rejection = self._reject_locally(gstin)
        if rejection is not None:
            logger.info(f"GSTIN rejected locally: {gstin!r} ({rejection.code})")
            return rejection

        gstin = str(GSTIN.parse(gstin))

        if not self.is_configured:
            logger.warning("GST provider key not configured, skipping verification")
            return VerificationResult(
                valid=False,
                status=VerificationStatus.MISSING_PROVIDER_KEY.value,
                code=VerificationErrorCode.MISSING_GST_API_KEY.value,
                message=MISSING_KEY_MESSAGE,
            )

        logger.info(f"Verifying GSTIN with provider: {gstin}")

        last_error: Optional[VerificationResult] = None
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            for param_name in KEY_PARAM_NAMES:
                params = {"gstNo": gstin, param_name: self.api_key}
                try:
                    async with session.get(
                        self.provider_url,
                        params=params,
                        headers={"Accept": "application/json"},
                    ) as response:
                        if not 200 <= response.status < 300:
                            logger.warning(
                                f"GST provider {self.provider_url} returned HTTP {response.status} "
                                f"using '{param_name}'"
                            )
                            last_error = VerificationResult(
                                valid=False,
                                status=f"HTTP_{response.status}",
                                status_code=response.status,
                                code=VerificationErrorCode.PROVIDER_HTTP_ERROR.value,
                                message=f"GST provider returned HTTP {response.status}",
                            )
                            continue

                        payload = await self._read_json(response)
                        result = parse_provider_payload(payload, response.status)
                        logger.info(f"GSTIN {gstin} verified: valid={result.valid}, status={result.status}")
                        return result

                except asyncio.TimeoutError:
                    logger.warning(f"GST provider request timed out using '{param_name}'")
                    last_error = self._unreachable("GST provider request timed out")
                except aiohttp.ClientError as e:
                    logger.warning(f"GST provider request failed using '{param_name}': {e}")
                    last_error = self._unreachable(str(e) or UNREACHABLE_MESSAGE)
                except Exception as e:
                    logger.error(f"Unexpected error contacting GST provider: {e}")
                    last_error = self._unreachable(
                        str(e) or "Unexpected error contacting GST provider"
                    )

        return last_error or self._unreachable(UNREACHABLE_MESSAGE)

    def _reject_locally(self, gstin: str) -> Optional[VerificationResult]:
        if not is_valid_gstin_format(gstin):
            return VerificationResult(
                valid=False,
                status=VerificationStatus.INVALID_GSTIN.value,
                code=VerificationErrorCode.INVALID_GSTIN_FORMAT.value,
                message=FORMAT_ERROR_MESSAGE,
            )
        if not is_valid_gstin_checksum(gstin):
            return VerificationResult(
                valid=False,
                status=VerificationStatus.INVALID_GSTIN.value,
                code=VerificationErrorCode.INVALID_GSTIN_CHECKSUM.value,
                message=CHECKSUM_ERROR_MESSAGE,
            )
        return None

    @staticmethod
    async def _read_json(response) -> Any:
        # Providers sometimes answer with text/html or an empty body
        try:
            return await response.json(content_type=None)
        except (ValueError, aiohttp.ClientResponseError):
            return {}

    @staticmethod
    def _unreachable(message: str) -> VerificationResult:
        return VerificationResult(
            valid=False,
            status=VerificationStatus.ERROR.value,
            code=VerificationErrorCode.PROVIDER_UNREACHABLE.value,
            message=message,
        )


async def verify_gstin_with_provider(gstin_raw: Optional[str]) -> VerificationResult:
    """Verify a raw GSTIN using the configured provider settings"""
    return await GSTVerificationClient().verify(gstin_raw)
