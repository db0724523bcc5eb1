#!/usr/bin/env python3
"""
Admin Token Generator
Mints bearer tokens for the gallery admin routes.
Only needed when ENFORCE_ADMIN_AUTH=true; the e-mail must be listed in ADMIN_EMAILS.
"""
import argparse
from datetime import timedelta

from gallery_api.config import settings
from gallery_api.utils.auth import get_admin_emails, is_admin_email
from gallery_api.utils.jwt_auth import create_admin_token


def main():
    """Main function to generate an admin token."""
    parser = argparse.ArgumentParser(description="Generate an admin bearer token")
    parser.add_argument("email", nargs="?", help="Admin e-mail (prompted if omitted)")
    parser.add_argument("--days", type=int, default=None, help="Token lifetime in days")
    args = parser.parse_args()

    print("=" * 60)
    print("Gallery Admin Token Generator")
    print("=" * 60)
    print()

    if not get_admin_emails():
        print("❌ Error: ADMIN_EMAILS is empty; add your address to .env first")
        return

    email = args.email or input("Enter admin e-mail: ").strip()

    if not email:
        print("\n❌ Error: E-mail cannot be empty")
        return

    if not is_admin_email(email):
        print(f"\n❌ Error: {email} is not listed in ADMIN_EMAILS")
        return

    expires = timedelta(days=args.days) if args.days else None
    token = create_admin_token(email, expires)

    lifetime = f"{args.days} day(s)" if args.days else f"{settings.ADMIN_TOKEN_EXPIRE_MINUTES} minute(s)"
    print(f"\n✅ Token for {email} (valid for {lifetime}):\n")
    print(token)
    print()
    print("Send it as:  Authorization: Bearer <token>")
    if not settings.ENFORCE_ADMIN_AUTH:
        print("⚠️  ENFORCE_ADMIN_AUTH is off, so the API does not check tokens yet.")
    print()


if __name__ == "__main__":
    main()
