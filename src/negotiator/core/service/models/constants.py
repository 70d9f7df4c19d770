"""Chat role and outcome constants."""

# ---------------------------------------------------------------------------
# Chat turn roles
# ---------------------------------------------------------------------------

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

# ---------------------------------------------------------------------------
# Chat request outcomes (metric label values)
# ---------------------------------------------------------------------------

OUTCOME_OK = "ok"
OUTCOME_INVALID = "invalid_request"
OUTCOME_NOT_FOUND = "carrier_not_found"
OUTCOME_ERROR = "error"
OUTCOME_CANCELLED = "cancelled"

__all__ = [
    "ROLE_SYSTEM",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "OUTCOME_OK",
    "OUTCOME_INVALID",
    "OUTCOME_NOT_FOUND",
    "OUTCOME_ERROR",
    "OUTCOME_CANCELLED",
]
