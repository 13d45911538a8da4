"""Print a long-lived access token for an existing account.

Usage:
    python create_token.py admin@example.com [days]
"""
import sys

from booking_platform_api.app.core.security import create_access_token

email = sys.argv[1] if len(sys.argv) > 1 else "admin@example.com"
days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
token = create_access_token({"sub": email}, expires_delta=days * 24 * 60 * 60)
print(token)
