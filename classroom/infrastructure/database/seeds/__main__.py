# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Command-line entry point for seeding the database."""

import argparse
import asyncio
import sys
from pathlib import Path

from classroom.core.config import get_settings
from classroom.infrastructure.database.connection import Database
from classroom.infrastructure.database.seeds import (
    PasswordHasher,
    SeedReconciler,
    load_seed_data,
)
from classroom.utils.logging import get_logger, setup_logging

logger = get_logger("classroom.seeds")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the classroom database with sample data")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="Seed dataset JSON (defaults to SEED_DATA_FILE)",
    )
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create missing tables before seeding",
    )
    parser.add_argument(
        "--no-wipe",
        action="store_true",
        help="Keep existing rows instead of deleting them first",
    )
    return parser.parse_args(argv)


async def main(args: argparse.Namespace) -> None:
    settings = get_settings()
    data_file = args.data_file or settings.seed.data_file

    database = Database.from_settings(settings)
    try:
        if args.create_schema:
            await database.create_schema()

        logger.info("Seeding database", data_file=str(data_file))
        reconciler = SeedReconciler(
            database,
            PasswordHasher(rounds=settings.seed.bcrypt_rounds),
        )
        await reconciler.run(load_seed_data(Path(data_file)), wipe=not args.no_wipe)
    finally:
        await database.dispose()


if __name__ == "__main__":
    cli_args = parse_args()
    setup_logging(get_settings())
    try:
        asyncio.run(main(cli_args))
    except Exception:
        logger.exception("Seed failed")
        sys.exit(1)
