"""Promote or demote a storefront user.

Usage:
    python -m storefront.set_role --email alice@example.com --role 1

Role 1 is administrator, role 0 is a standard user. This is the only
supported way to change a role; no API endpoint does it.
"""
import argparse
import sys

from storefront.core.config import load_settings
from storefront.crud.users import find_user_by_email, update_user_by_id
from storefront.database import build_engine, build_session_factory, create_tables
from storefront.models.user import ADMIN_ROLE, USER_ROLE


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--email", required=True)
    parser.add_argument("--role", type=int, choices=[USER_ROLE, ADMIN_ROLE], required=True)
    parser.add_argument("--database-url", default=None)
    args = parser.parse_args(argv)

    settings = load_settings()
    engine = build_engine(args.database_url or settings.DATABASE_URL)
    create_tables(engine)
    db = build_session_factory(engine)()
    try:
        user = find_user_by_email(db, args.email)
        if user is None:
            print(f"No user registered with email {args.email}", file=sys.stderr)
            return 1
        update_user_by_id(db, user.id, role=args.role)
    finally:
        db.close()
        engine.dispose()

    print(f"User {args.email} now has role {args.role}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
