#!/usr/bin/env python3
"""
Reset a user's password in the booking platform SQLite database.

The script never reads existing passwords.  It stores a new PBKDF2 hash
(the same ``salthex$hashhex`` format the API uses) for the account with
the given email and, with ``--activate``, re-enables a disabled account.

Usage:
    python reset_password.py --db ./booking_platform.db --email admin@example.com --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import os
import sqlite3
import sys

from booking_platform_api.app.core.security import hash_password


MIN_PASSWORD_LENGTH = 6


def main() -> None:
    ap = argparse.ArgumentParser(description="Reset a booking platform user password (SQLite).")
    ap.add_argument("--db", required=True, help="Path to SQLite DB file (e.g., ./booking_platform.db)")
    ap.add_argument("--email", required=True, help="User email to update")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    ap.add_argument("--activate", action="store_true", help="Also mark the account active")
    args = ap.parse_args()

    if not os.path.exists(args.db):
        print(f"[!] DB not found: {args.db}", file=sys.stderr)
        sys.exit(1)

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        print(f"[!] Password must be at least {MIN_PASSWORD_LENGTH} characters.", file=sys.stderr)
        sys.exit(1)

    conn = sqlite3.connect(args.db)
    try:
        cur = conn.cursor()
        cur.execute("SELECT id FROM users WHERE email = ?", (args.email,))
        if not cur.fetchone():
            print(f"[!] No user found with email: {args.email}", file=sys.stderr)
            sys.exit(2)

        assignments = "password = ?, updated_at = CURRENT_TIMESTAMP"
        if args.activate:
            assignments += ", active = 1"
        cur.execute(f"UPDATE users SET {assignments} WHERE email = ?", (hash_password(new_password), args.email))
        conn.commit()
        print(f"[+] Password updated for user: {args.email}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
