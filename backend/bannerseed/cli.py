from __future__ import annotations

import argparse
import logging
from pathlib import Path

from bannerseed.core.config import get_settings
from bannerseed.core.logging import configure_logging
from bannerseed.dependencies import build_migration, get_transport_policy
from bannerseed.domain.errors import TransactionError
from bannerseed.infra.db.session import init_db
from bannerseed.infra.http.fetcher import ImageFetcher
from bannerseed.seeds.banners import DEFAULT_BANNERS, load_seed_file

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bannerseed", description="Seed CMS banners with remote images.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    up = subparsers.add_parser("up", help="Run the banner seed migration once.")
    up.add_argument("--seed-file", type=Path, default=None, help="JSON file with banners to seed.")
    up.add_argument("--create-tables", action="store_true", help="Create missing tables before seeding.")
    up.add_argument(
        "--insecure-tls",
        action="store_true",
        default=None,
        help="Accept any TLS certificate when downloading images.",
    )
    return parser


def _run_up(args: argparse.Namespace) -> int:
    if args.create_tables:
        init_db()

    items = load_seed_file(args.seed_file) if args.seed_file else list(DEFAULT_BANNERS)
    policy = get_transport_policy(insecure_tls=args.insecure_tls)
    if not policy.verify_tls:
        logger.warning("TLS certificate verification is disabled for image downloads")

    with ImageFetcher(policy=policy) as fetcher:
        migration = build_migration(items=items, fetcher=fetcher)
        try:
            result = migration.run()
        except TransactionError:
            logger.exception("Banner migration failed")
            return 1

    logger.info("Finished: state=%s created=%d", result.state, result.created)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)

    if args.command == "up":
        return _run_up(args)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
