"""
GSTIN normalization, format and checksum validation
"""
from typing import Any, Dict, List, Optional
import re

from pydantic import BaseModel, ConfigDict, field_validator

# GSTIN layout for "27AAPFU0939F1ZV":
# 0-1:  State code (27)
# 2-11: PAN (AAPFU0939F) - 5 letters, 4 digits, 1 letter
# 12:   Entity number (1), never 0
# 13:   Always 'Z'
# 14:   Check character (V)
GSTIN_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
GSTIN_LENGTH = 15

CHECKSUM_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
CHECKSUM_MODULUS = len(CHECKSUM_ALPHABET)

_WHITESPACE = re.compile(r"\s+")

STATE_CODES = {
    "01": "Jammu & Kashmir", "02": "Himachal Pradesh", "03": "Punjab",
    "04": "Chandigarh", "05": "Uttarakhand", "06": "Haryana",
    "07": "Delhi", "08": "Rajasthan", "09": "Uttar Pradesh",
    "10": "Bihar", "11": "Sikkim", "12": "Arunachal Pradesh",
    "13": "Nagaland", "14": "Manipur", "15": "Mizoram",
    "16": "Tripura", "17": "Meghalaya", "18": "Assam",
    "19": "West Bengal", "20": "Jharkhand", "21": "Odisha",
    "22": "Chhattisgarh", "23": "Madhya Pradesh", "24": "Gujarat",
    "25": "Daman & Diu", "26": "Dadra & Nagar Haveli", "27": "Maharashtra",
    "28": "Andhra Pradesh (Old)", "29": "Karnataka", "30": "Goa",
    "31": "Lakshadweep", "32": "Kerala", "33": "Tamil Nadu",
    "34": "Puducherry", "35": "Andaman & Nicobar", "36": "Telangana",
    "37": "Andhra Pradesh", "38": "Ladakh",
    "97": "Other Territory", "99": "Centre Jurisdiction",
}

FORMAT_ERROR_MESSAGE = (
    "Invalid GSTIN format. Must be 15 characters: 2 digits (state) + 10 characters (PAN) "
    "+ 1 character (entity) + 'Z' + 1 check character"
)
CHECKSUM_ERROR_MESSAGE = "Invalid GSTIN checksum. The last character does not match the GSTIN"


class InvalidGSTINError(ValueError):
    """Raised when a string cannot be parsed into a GSTIN"""
    pass


def normalize_gstin(gstin_raw: Optional[str]) -> str:
    """Strip all whitespace and uppercase the GSTIN"""
    return _WHITESPACE.sub("", gstin_raw or "").upper()


def is_valid_gstin_format(gstin_raw: Optional[str]) -> bool:
    """Validate GSTIN format using regex"""
    gstin = normalize_gstin(gstin_raw)
    if len(gstin) != GSTIN_LENGTH:
        return False
    return bool(GSTIN_PATTERN.match(gstin))


def _char_value(ch: str) -> int:
    return CHECKSUM_ALPHABET.find(ch) if len(ch) == 1 else -1


def compute_check_character(prefix: str) -> Optional[str]:
    """
    Compute the MOD-36 check character for the first 14 GSTIN characters.

    Weights alternate 1, 2, 1, ... starting at index 0; each weighted value
    contributes its quotient and remainder by 36 to the sum.
    Returns None if the prefix is not 14 characters of 0-9/A-Z.
    """
    if prefix is None or len(prefix) != GSTIN_LENGTH - 1:
        return None

    total = 0
    for index, ch in enumerate(prefix):
        value = _char_value(ch)
        if value < 0:
            return None
        weight = 1 if index % 2 == 0 else 2
        product = value * weight
        total += product // CHECKSUM_MODULUS + product % CHECKSUM_MODULUS

    check_value = (CHECKSUM_MODULUS - total % CHECKSUM_MODULUS) % CHECKSUM_MODULUS
    return CHECKSUM_ALPHABET[check_value]


def is_valid_gstin_checksum(gstin_raw: Optional[str]) -> bool:
    """Recompute the check character and compare it with the 15th character"""
    gstin = normalize_gstin(gstin_raw)
    if len(gstin) != GSTIN_LENGTH:
        return False
    expected = compute_check_character(gstin[:14])
    return expected is not None and expected == gstin[14]


def is_likely_valid_gstin(gstin_raw: Optional[str]) -> bool:
    """Format and checksum both pass; no network call involved"""
    return is_valid_gstin_format(gstin_raw) and is_valid_gstin_checksum(gstin_raw)


def state_name_for(state_code: str) -> Optional[str]:
    return STATE_CODES.get(state_code)


def _ensure_valid_gstin(gstin_raw: Optional[str]) -> str:
    gstin = normalize_gstin(gstin_raw)
    if not is_valid_gstin_format(gstin):
        raise InvalidGSTINError(FORMAT_ERROR_MESSAGE)
    if not is_valid_gstin_checksum(gstin):
        raise InvalidGSTINError(CHECKSUM_ERROR_MESSAGE)
    return gstin


class GSTIN(BaseModel):
    """A validated GSTIN in canonical (uppercase, whitespace-free) form"""

    model_config = ConfigDict(frozen=True)

    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _canonical_value(cls, value: Any) -> str:
        # Direct construction surfaces as a pydantic ValidationError (a ValueError)
        return _ensure_valid_gstin(value if isinstance(value, str) else None)

    @classmethod
    def parse(cls, gstin_raw: Optional[str]) -> "GSTIN":
        """Build a GSTIN, raising InvalidGSTINError for malformed input"""
        return cls(value=_ensure_valid_gstin(gstin_raw))

    @property
    def state_code(self) -> str:
        return self.value[:2]

    @property
    def state_name(self) -> Optional[str]:
        return state_name_for(self.state_code)

    @property
    def pan(self) -> str:
        return self.value[2:12]

    @property
    def entity_code(self) -> str:
        return self.value[12]

    @property
    def check_character(self) -> str:
        return self.value[14]

    def __str__(self) -> str:
        return self.value


def inspect_gstin(gstin_raw: Optional[str]) -> Dict[str, Any]:
    """
    Break a GSTIN down into its validation results and components.

    Used for form feedback during seller onboarding. ``errors`` explains
    why the composite check failed; ``warnings`` flags values that pass
    the checks but look suspicious, such as an unknown state code.
    """
    gstin = normalize_gstin(gstin_raw)
    format_valid = is_valid_gstin_format(gstin)
    checksum_valid = is_valid_gstin_checksum(gstin)

    errors: List[str] = []
    warnings: List[str] = []

    if len(gstin) != GSTIN_LENGTH:
        errors.append(f"GSTIN must be exactly {GSTIN_LENGTH} characters long, got {len(gstin)}")
    elif not format_valid:
        errors.append(FORMAT_ERROR_MESSAGE)

    expected = compute_check_character(gstin[:14]) if len(gstin) == GSTIN_LENGTH else None
    if len(gstin) == GSTIN_LENGTH and not checksum_valid:
        errors.append(CHECKSUM_ERROR_MESSAGE)

    details: Dict[str, Any] = {
        "gstin": gstin_raw or "",
        "normalized": gstin,
        "is_valid": format_valid and checksum_valid,
        "format_valid": format_valid,
        "checksum_valid": checksum_valid,
        "expected_check_character": expected,
        "state_code": None,
        "state_name": None,
        "pan": None,
        "entity_code": None,
        "errors": errors,
        "warnings": warnings,
    }

    if format_valid:
        details["state_code"] = gstin[:2]
        details["state_name"] = state_name_for(gstin[:2])
        details["pan"] = gstin[2:12]
        details["entity_code"] = gstin[12]
        if details["state_name"] is None:
            warnings.append(f"Unknown state code: {gstin[:2]}")

    return details
