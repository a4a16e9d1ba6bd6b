"""Numeric password reset codes."""

import secrets

RESET_CODE_MIN = 100000
RESET_CODE_MAX = 999999


def generate_reset_code() -> str:
    """Return a 6-digit code drawn uniformly from [100000, 999999]."""
    return str(RESET_CODE_MIN + secrets.randbelow(RESET_CODE_MAX - RESET_CODE_MIN + 1))
