"""Print a long‑lived access token for an operator e‑mail.

Usage:
    python create_token.py admin@example.com [days]
"""
import sys

from tourism_api.app.core.security import create_access_token


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print(__doc__.strip(), file=sys.stderr)
        return 1
    days = int(argv[2]) if len(argv) > 2 else 365
    print(create_access_token({"sub": argv[1]}, expires_delta=days * 24 * 60 * 60))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
