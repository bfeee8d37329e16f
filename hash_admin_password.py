#!/usr/bin/env python3
"""
Generate a value for ``ADMIN_PASSWORD_HASH``.

Prints a PBKDF2-HMAC-SHA256 hash (format "salthex$hashhex") of the
given password.  Put the printed line into the environment or the
``.env`` file of the API.  bcrypt hashes made for earlier deployments
are accepted by the API as well, so existing values need not change.

Usage:
    python hash_admin_password.py --password "NewStrongPass!234"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import sys
from typing import List, Optional

from services_catalog_api.app.core.security import hash_password


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Hash the admin password for ADMIN_PASSWORD_HASH.")
    ap.add_argument("--password", help="Admin password. If omitted, you'll be prompted securely.")
    ap.add_argument("--env", action="store_true", help="Print as ADMIN_PASSWORD_HASH=<hash>")
    args = ap.parse_args(argv)

    password = args.password
    if password is None:
        password = getpass.getpass("Enter admin password: ")
        if password != getpass.getpass("Repeat admin password: "):
            print("[!] Passwords do not match.", file=sys.stderr)
            return 1
    if not password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        return 1

    hashed = hash_password(password)
    print(f"ADMIN_PASSWORD_HASH={hashed}" if args.env else hashed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
