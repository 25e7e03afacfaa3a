"""Command line interface for the Raindrop tag cleanup tool."""

import argparse
import sys
from typing import Optional

from ..auth.oauth import AuthSession, OAuthCoordinator
from ..config import CLIENT_ID, REDIRECT_URI, get_client_secret, load_allowlist
from ..core.processor import RaindropTagCleaner


def _positive_seconds(value: str) -> float:
    seconds = float(value)
    if seconds <= 0:
        raise argparse.ArgumentTypeError("must be a positive number of seconds")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="🌧️  Raindrop Tag Cleanup Tool - delete every tag you don't want to keep",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  raindrop-tag-cleanup                                  # Delete all tags
  raindrop-tag-cleanup --allowlist-file keep.txt        # Keep the tags listed in keep.txt
  raindrop-tag-cleanup --allowlist-file keep.txt -n     # Show what would be deleted

Environment Variables Required:
  RAINDROP_CLIENT_SECRET   - OAuth client secret for the Raindrop.io app

The allowlist file holds one tag per line; blank lines are ignored.
Deletions are paced to stay under Raindrop's 120 requests/minute limit.
        """,
    )

    parser.add_argument(
        "--allowlist-file",
        "-a",
        default="",
        help="Text file with tags to keep, one per line",
    )

    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Print what would happen but don't delete anything",
    )

    parser.add_argument(
        "--no-browser",
        action="store_true",
        help=(
            "Don't try to open the authorization URL in a browser "
            "(use on headless machines, where a console browser like lynx "
            "would block the terminal)"
        ),
    )

    parser.add_argument(
        "--auth-timeout",
        type=_positive_seconds,
        default=None,
        metavar="SECONDS",
        help="Give up waiting for browser authorization after SECONDS (default: wait forever)",
    )

    return parser


def main(argv: Optional[list[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    print("🌧️  Raindrop Tag Cleanup Tool")
    print("============================")

    cleaner = None
    try:
        client_secret = get_client_secret()

        allowlist = load_allowlist(args.allowlist_file)
        if not args.allowlist_file:
            print("📝 No --allowlist-file specified.")

        session = AuthSession(CLIENT_ID, client_secret, REDIRECT_URI)
        coordinator = OAuthCoordinator(
            session,
            launch_browser=not args.no_browser,
            timeout=args.auth_timeout,
        )
        access_token = coordinator.authorize()

        cleaner = RaindropTagCleaner(access_token, dry_run=args.dry_run)
        if cleaner.run(allowlist) is not None:
            cleaner.print_stats()

    except KeyboardInterrupt:
        print("\n\n⏹️  Cleanup interrupted by user")
        if cleaner is not None and cleaner.tally.total:
            cleaner.print_stats()
        sys.exit(130)
    except Exception as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
