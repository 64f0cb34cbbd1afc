"""
Development Token Script

Prints a signed auth token for a user id, for calling the API by hand:

    python scripts/issue_token.py 1
    curl --cookie "token=$(python scripts/issue_token.py 1)" localhost:8000/api/v1/restaurant

Run from project root with SECRET_KEY set (or present in .env).
"""

import argparse
import os
import sys
from datetime import timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from restaurant_api.core.security import get_token_verifier


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development auth token")
    parser.add_argument("user_id", type=int, help="User id to put in the token")
    parser.add_argument(
        "--hours",
        type=int,
        default=None,
        help="Token lifetime in hours (default: TOKEN_TTL_HOURS)",
    )
    args = parser.parse_args()

    verifier = get_token_verifier()
    ttl = timedelta(hours=args.hours) if args.hours is not None else None
    print(verifier.issue(args.user_id, ttl=ttl))


if __name__ == "__main__":
    main()
