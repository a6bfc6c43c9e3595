"""
Operator script to send recommendation emails on demand.

Usage:
    # Compute and email recommendations for one user
    python scripts/send_recommendations.py --user-id 1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed

    # Resend one stored email without recomputing it
    python scripts/send_recommendations.py --resend 7c9e6679-7425-40de-944b-e07fc1f90ae7

    # Resend every failed email
    python scripts/send_recommendations.py --resend-failed --limit 50
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging

from tvtracker_recommendation_service.errors import RecommendationError
from tvtracker_recommendation_service.services import RecommendationService

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Send TV show recommendation emails'
    )

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        '--user-id',
        type=str,
        help='Compute and send recommendations for this user'
    )
    group.add_argument(
        '--resend',
        type=str,
        metavar='EMAIL_ID',
        help='Resend a stored email by ID'
    )
    group.add_argument(
        '--resend-failed',
        action='store_true',
        help='Resend all failed emails'
    )

    parser.add_argument(
        '--limit',
        type=int,
        default=100,
        help='Maximum number of failed emails to resend (default: 100)'
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main execution function."""
    args = parse_args(argv)
    service = RecommendationService()

    try:
        if args.user_id:
            result = service.generate_and_send_recommendations(args.user_id)
            logger.info(f"✓ Sent {result['count']} recommendations to {result['sent_to']}")

        elif args.resend:
            result = service.resend_email(args.resend)
            logger.info(f"✓ Resent email {result['email_id']} to {result['sent_to']}")

        else:
            stats = service.resend_failed_emails(limit=args.limit)
            logger.info(f"Attempted: {stats['attempted']}, sent: {stats['sent']}, failed: {stats['failed']}")
            if stats['failed']:
                return 1

    except RecommendationError as e:
        logger.error(f"✗ {e.reason} at {e.stage}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
