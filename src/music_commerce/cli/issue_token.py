"""
CLI for issuing an access token to an existing user.
"""

import argparse
import logging
from datetime import timedelta

from music_commerce.settings import get_settings
from music_commerce.tokens import create_access_token

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

def main():
    parser = argparse.ArgumentParser(
        description="Issue a bearer token for a user of the music commerce API."
    )

    cfg = get_settings()

    parser.add_argument(
        "--user-id",
        required=True,
        help="Id of the user the token authenticates (24 hex characters)."
    )

    parser.add_argument(
        "--minutes",
        type=int,
        default=cfg.access_token_expire_minutes,
        help="Token lifetime in minutes."
    )

    args = parser.parse_args()

    try:
        token = create_access_token(args.user_id, cfg, expires_in=timedelta(minutes=args.minutes))
        logger.info(f"SUCCESS: token for user {args.user_id} valid for {args.minutes} minutes")
        print(token)

    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
