#!/usr/bin/env python3
"""
Admin Token Verification Utility
Decodes a bearer token and reports whether the API would accept it.
"""
import sys
from datetime import datetime, timezone

from fastapi import HTTPException

from gallery_api.utils.auth import is_admin_email
from gallery_api.utils.jwt_auth import verify_token


def main():
    """Main function."""
    print("=" * 60)
    print("Admin Token Utility")
    print("=" * 60)
    print()

    if len(sys.argv) < 2:
        print("Usage:")
        print("  python verify_admin_token.py <token>")
        return

    token = sys.argv[1]

    try:
        payload = verify_token(token)
    except HTTPException as e:
        print(f"❌ Token rejected: {e.detail}")
        return

    subject = payload.get("sub")
    expires = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)

    print(f"Subject: {subject}")
    print(f"Expires: {expires.isoformat()}")
    print()

    if is_admin_email(subject):
        print("✅ Token is valid for admin routes")
    else:
        print("❌ Token is valid but its subject is not in ADMIN_EMAILS")


if __name__ == "__main__":
    main()
