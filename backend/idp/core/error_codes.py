# idp/core/error_codes.py
from enum import Enum

class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    DB_ERROR = "DB_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"

    # Auth
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Reference data
    DATASET_INVALID = "DATASET_INVALID"
    UNKNOWN_ROLE = "UNKNOWN_ROLE"
    UNKNOWN_COMPETENCY = "UNKNOWN_COMPETENCY"
    INVALID_ASSESSMENT_LEVEL = "INVALID_ASSESSMENT_LEVEL"
    INVALID_EMAIL = "INVALID_EMAIL"

    # Sharing / feedback
    DUPLICATE_SHARE = "DUPLICATE_SHARE"
    ASSESSMENT_INCOMPLETE = "ASSESSMENT_INCOMPLETE"
    FEEDBACK_STARTED = "FEEDBACK_STARTED"
    FEEDBACK_SUBMITTED = "FEEDBACK_SUBMITTED"
    FEEDBACK_INCOMPLETE = "FEEDBACK_INCOMPLETE"
    SHARE_FAILED = "SHARE_FAILED"
