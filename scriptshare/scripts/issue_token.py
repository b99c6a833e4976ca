"""Helper CLI to issue a login token for a user.

Usage examples:
    python -m scriptshare.scripts.issue_token --email admin@example.com
    python -m scriptshare.scripts.issue_token --email admin@example.com --days 1

Administrators are the emails listed in SCRIPTSHARE_ADMIN_USERS. Open
``/auth/token/<token>`` in a browser to keep the token in the session.
"""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

from scriptshare.config import get_config
from scriptshare.services.token import TokenService

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a signed user token")
    parser.add_argument("--email", type=str, required=True, help="User email")
    parser.add_argument(
        "--days", type=int, default=28, help="Token lifetime in days (default: 28)"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    # Create config explicitly for CLI usage (bypass FastAPI Depends)
    config = get_config()
    if not config.secret_key:
        raise SystemExit("SCRIPTSHARE_SECRET_KEY is not set")
    token = TokenService(config=config)._generate_new_token(
        args.email, ttl=timedelta(days=args.days)
    )
    if args.email not in config.admin_users:
        logger.warning("%s is not an administrator", args.email)
    print(token)


if __name__ == "__main__":
    main()
