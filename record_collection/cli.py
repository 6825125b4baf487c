"""Administrative commands: schema setup, accounts, API tokens and sample data."""

from __future__ import annotations

import argparse
import logging
import sys

from faker import Faker
from pydantic import ValidationError

from record_collection.db import database, models, schemas
from record_collection.db.repositories import records as record_repo
from record_collection.db.repositories import users as user_repo

logger = logging.getLogger("record_collection.cli")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()


def _count(value: str) -> int:
    count = int(value)
    if count < 0:
        raise argparse.ArgumentTypeError(f"count must be 0 or more, got {count}")
    return count


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="record-collection", description="Record collection administration")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create database tables")

    create_user = sub.add_parser("create-user", help="Create a login account")
    create_user.add_argument("--email", required=True)
    create_user.add_argument("--name", required=True)
    create_user.add_argument("--password", required=True)
    create_user.add_argument("--admin", action="store_true", help="Grant permission to add and edit records")

    issue_token = sub.add_parser("issue-token", help="Generate a new API token for a user")
    issue_token.add_argument("--email", required=True)

    seed = sub.add_parser("seed", help="Insert fake records for local testing")
    seed.add_argument("--count", type=_count, default=30, help="Number of records to insert (default: 30)")
    return parser.parse_args(argv)


def fake_record(faker: Faker) -> schemas.RecordCreate:
    return schemas.RecordCreate(
        artist=faker.name(),
        title=faker.street_name(),
        label=faker.company(),
        catalog_no=faker.isbn10(),
    )


def seed_records(session, count: int, faker: Faker | None = None) -> int:
    faker = faker or Faker()
    for _ in range(count):
        record_repo.create_record(session, fake_record(faker))
    return count


def _create_user(session, args: argparse.Namespace) -> int:
    if user_repo.get_user_by_email(session, args.email):
        print(f"A user with email {args.email} already exists.", file=sys.stderr)
        return 1
    try:
        payload = schemas.UserCreate(
            email=args.email,
            name=args.name,
            password=args.password,
            type=models.USER_TYPE_ADMIN if args.admin else models.USER_TYPE_REGULAR,
        )
    except ValidationError as exc:
        for err in exc.errors():
            print(f"{err['loc'][0]}: {err['msg']}", file=sys.stderr)
        return 2
    user = user_repo.create_user(session, payload)
    role = "admin" if user.is_admin else "user"
    print(f"Created {role} {user.email} (id={user.id})")
    return 0


def _issue_token(session, args: argparse.Namespace) -> int:
    user = user_repo.get_user_by_email(session, args.email)
    if not user:
        print(f"No user with email {args.email}.", file=sys.stderr)
        return 1
    print(user_repo.issue_api_token(session, user))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    database.init_db()
    if args.command == "init-db":
        print("Database tables are ready.")
        return 0

    session = SessionLocal()
    try:
        if args.command == "create-user":
            return _create_user(session, args)
        if args.command == "issue-token":
            return _issue_token(session, args)
        if args.command == "seed":
            inserted = seed_records(session, args.count)
            logger.info("Seeded records", extra={"inserted": inserted})
            print(f"Inserted {inserted} records.")
            return 0
    finally:
        session.close()
    return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
