from enum import Enum


class VerificationStatus(str, Enum):
    """Status tokens the service sets itself; provider statuses pass through as-is"""

    MISSING_PROVIDER_KEY = "MISSING_PROVIDER_KEY"
    INVALID_GSTIN = "INVALID_GSTIN"
    ERROR = "ERROR"


class VerificationErrorCode(str, Enum):

    MISSING_GST_API_KEY = "MISSING_GST_API_KEY"
    INVALID_GSTIN_FORMAT = "INVALID_GSTIN_FORMAT"
    INVALID_GSTIN_CHECKSUM = "INVALID_GSTIN_CHECKSUM"
    PROVIDER_HTTP_ERROR = "PROVIDER_HTTP_ERROR"
    PROVIDER_UNREACHABLE = "PROVIDER_UNREACHABLE"
