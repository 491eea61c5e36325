"""
error_reasons.py
- Purpose: Human-friendly "reason" strings.
- Keep these stable; they may be surfaced in UI and emails.
"""

from enum import Enum


class ErrorReason(str, Enum):
    INVALID_INPUT = "Invalid input"
    RESOURCE_NOT_FOUND = "Resource not found"
    ALREADY_EXISTS = "Resource already exists"
    NOT_AUTHORIZED = "Not authorized"

    DATABASE_UNAVAILABLE = "Database unavailable"
    MISSING_DEPENDENCY = "Missing dependency"
    AUTH_REQUIRED = "Authentication required"
    AUTH_INVALID = "Invalid authentication"

    SHARE_NOT_FOUND = "Share not found or has been deleted"
    SHARE_DUPLICATE = "Duplicate assessment"
    SHARE_FAILED = "Share could not be created"
    ASSESSMENT_INCOMPLETE = "Assessment incomplete"
    FEEDBACK_STARTED = "Feedback already started"
    FEEDBACK_SUBMITTED = "Feedback already submitted"
    DATASET_INVALID = "Reference dataset invalid"
