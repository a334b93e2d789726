"""Module: grant_admin."""

import sys

from groomdesk.core.enums import Role
from groomdesk.core.errors import NotFound
from groomdesk.db.init_db import init_db
from groomdesk.db.session import SessionLocal
from groomdesk.services.identity import grant_role


if __name__ == "__main__":
    # One-off maintenance script: promote (or with --revoke, demote) an existing account.
    if len(sys.argv) < 2:
        print("usage: python -m groomdesk.scripts.grant_admin <email> [--revoke]")
        sys.exit(2)

    email = sys.argv[1]
    role = Role.CUSTOMER if "--revoke" in sys.argv[2:] else Role.ADMIN

    init_db()
    session = SessionLocal()
    try:
        user_id = grant_role(session, email, role)
        print(f"{email} ({user_id}) is now {role.value}.")
    except NotFound as exc:
        print(exc.detail)
        sys.exit(1)
    finally:
        session.close()
