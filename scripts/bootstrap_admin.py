#!/usr/bin/env python3
"""Create the database tables and the first administrator account.

Every other account is created through the API by an authenticated account,
so a fresh install needs one to start with.

Usage:
    python -m scripts.bootstrap_admin --id admin --password 'correct-horse'

    # Or with environment variables:
    SHORTLINK_ADMIN_ID=admin SHORTLINK_ADMIN_PASSWORD=... python -m scripts.bootstrap_admin
"""

import argparse
import asyncio
import logging
import os
import re
import sys

from sqlmodel import SQLModel

from config import ApplicationConfig
from shortlink.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from shortlink.app.repositories.errors import ConstraintViolation
from shortlink.app.services.clock import SystemClock
from shortlink.app.services.password_hasher import PasswordHasher
from shortlink.depends import AsyncSessionLocal, engine
from shortlink.domain.entities import Account, ProvenanceMetadata

BOOTSTRAP_ACTOR = "bootstrap"


async def bootstrap_admin(account_id: str, password: str) -> str:
    """
    Create tables and the account.

    Returns:
        'created' or 'exists'
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    try:
        return await _create_account(account_id, password)
    finally:
        await engine.dispose()


async def _create_account(account_id: str, password: str) -> str:
    hasher = PasswordHasher(rounds=ApplicationConfig.BCRYPT_ROUNDS)
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUnitOfWork(session)
        async with uow:
            if await uow.accounts.get_by_id(account_id) is not None:
                return "exists"

            account = Account(
                id=account_id, password_hash=hasher.prepare(password), disabled=False
            )
            account.set_provenance(
                ProvenanceMetadata.created(BOOTSTRAP_ACTOR, SystemClock().now())
            )
            try:
                await uow.accounts.create(account)
            except ConstraintViolation:
                return "exists"
            await uow.commit()
    return "created"


def main():
    parser = argparse.ArgumentParser(
        description="Bootstrap the first shortlink account",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--id",
        dest="account_id",
        default=os.environ.get("SHORTLINK_ADMIN_ID"),
        help="Account ID (or set SHORTLINK_ADMIN_ID env var)",
    )
    parser.add_argument(
        "--password",
        default=os.environ.get("SHORTLINK_ADMIN_PASSWORD"),
        help="Password (or set SHORTLINK_ADMIN_PASSWORD env var)",
    )
    args = parser.parse_args()

    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL.upper())

    if not args.account_id or not re.fullmatch(
        ApplicationConfig.ACCOUNT_ID_PATTERN, args.account_id
    ):
        print("Error: --id is required and may only contain letters, digits, '_' or '-'")
        sys.exit(1)
    if not args.password or len(args.password) < ApplicationConfig.MIN_PASSWORD_LENGTH:
        print(
            f"Error: --password must be at least "
            f"{ApplicationConfig.MIN_PASSWORD_LENGTH} characters"
        )
        sys.exit(1)

    status = asyncio.run(bootstrap_admin(args.account_id, args.password))
    if status == "created":
        print(f"Account '{args.account_id}' created.")
    else:
        print(f"Account '{args.account_id}' already exists, nothing to do.")


if __name__ == "__main__":
    main()
