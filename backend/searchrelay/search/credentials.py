"""Credential rotation: turn the configured key(s) into an ordered candidate list."""

from collections.abc import Sequence


def normalize_credentials(configured: str | Sequence[str] | None) -> list[str]:
    """
    Accept a single key, a comma-separated string of keys, or a sequence of keys.
    Values are trimmed and blanks dropped; order is kept and defines fallback priority.
    """
    if not configured:
        return []
    if isinstance(configured, str):
        values = configured.split(",")
    else:
        values = list(configured)
    return [v.strip() for v in values if v and v.strip()]


def mask_credential(secret: str) -> str:
    if len(secret) <= 4:
        return "****"
    return f"****{secret[-4:]}"
