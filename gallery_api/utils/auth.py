"""
Admin allow-list utilities.
Admins are identified by e-mail address; the list lives in configuration.
"""
from typing import List, Optional

from gallery_api.config import settings


def parse_admin_emails(raw: str) -> List[str]:
    """
    Split a comma separated e-mail list.

    Args:
        raw: Value such as "a@example.com, B@example.com"

    Returns:
        Lower-cased, trimmed addresses with empties removed
    """
    return [email.strip().lower() for email in raw.split(",") if email.strip()]


def get_admin_emails() -> List[str]:
    return parse_admin_emails(settings.ADMIN_EMAILS)


def is_admin_email(email: Optional[str]) -> bool:
    """
    Check an e-mail address against the configured admin list.

    Args:
        email: Address to check (case-insensitive)

    Returns:
        True if the address is an admin, False otherwise
    """
    if not email:
        return False
    return email.strip().lower() in get_admin_emails()
