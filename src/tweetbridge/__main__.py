"""CLI entry-point: ``python -m tweetbridge poll`` / ``post`` / ``dm``."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from tweetbridge import config
from tweetbridge.client import TwitterClient
from tweetbridge.host import ConsoleHost
from tweetbridge.session import SessionRegistry
from tweetbridge.transport import RequestsTransport

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _connect(account: str | None) -> tuple[TwitterClient, RequestsTransport, ConsoleHost]:
    user, password = config.require_credentials()
    name = account or user
    registry = SessionRegistry()
    session = registry.connect(
        handle=user,
        secret=password,
        settings=config.account_settings(name),
    )
    transport = RequestsTransport(timeout=config.HTTP_TIMEOUT)
    host = ConsoleHost()
    client = TwitterClient(session, registry, transport, host, api_base=config.API_BASE)
    return client, transport, host


def _poll(account: str | None, cycles: int, interval: float, friends: str) -> int:
    client, transport, host = _connect(account)
    logger.info(
        "=== tweetbridge poll start [user=%s, mode=%s] ===",
        client.session.handle,
        "grouped" if client.session.settings.use_groupchat else "direct",
    )

    if friends == "ids":
        client.get_friends_ids()
    elif friends == "users":
        client.get_statuses_friends()
    transport.run_pending()

    for cycle in range(1, cycles + 1):
        client.get_home_timeline()
        transport.run_pending()
        logger.info(
            "Cycle %d/%d done; watermark=%s",
            cycle,
            cycles,
            client.session.timeline_watermark,
        )
        if cycle < cycles:
            time.sleep(interval)

    logger.info(
        "=== tweetbridge poll done [%d buddies, %d errors] ===",
        len(host.buddies),
        len(host.errors),
    )
    return 1 if host.errors else 0


def _post(text: str) -> int:
    client, transport, host = _connect(None)
    client.post_status(text)
    transport.run_pending()
    return 1 if host.errors else 0


def _dm(who: str, text: str) -> int:
    client, transport, host = _connect(None)
    client.direct_messages_new(who, text)
    transport.run_pending()
    return 1 if host.errors else 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="tweetbridge",
        description="Poll a microblog timeline and deliver it as chat messages.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = parser.add_subparsers(dest="command")

    # ── poll ───────────────────────────────────────────────────────────
    poll_parser = sub.add_parser("poll", help="Fetch friends, then poll the home timeline.")
    poll_parser.add_argument(
        "--account",
        default=None,
        help="Account name in the accounts file (default: TWEETBRIDGE_USER).",
    )
    poll_parser.add_argument(
        "--cycles",
        type=int,
        default=1,
        help="Number of timeline polls (default: 1).",
    )
    poll_parser.add_argument(
        "--interval",
        type=float,
        default=config.POLL_INTERVAL,
        help="Seconds between polls (default: TWEETBRIDGE_POLL_INTERVAL).",
    )
    poll_parser.add_argument(
        "--friends",
        choices=["ids", "users", "none"],
        default="users",
        help="Friend listing to walk before polling (default: users).",
    )

    # ── post ───────────────────────────────────────────────────────────
    post_parser = sub.add_parser("post", help="Post a new status.")
    post_parser.add_argument("text")

    # ── dm ─────────────────────────────────────────────────────────────
    dm_parser = sub.add_parser("dm", help="Send a direct message.")
    dm_parser.add_argument("who")
    dm_parser.add_argument("text")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        if args.command == "poll":
            code = _poll(args.account, args.cycles, args.interval, args.friends)
        elif args.command == "post":
            code = _post(args.text)
        elif args.command == "dm":
            code = _dm(args.who, args.text)
        else:
            parser.print_help()
            sys.exit(1)
    except config.ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(2)
    sys.exit(code)


if __name__ == "__main__":
    main()
