"""Approve an account directly in the database.

Used to activate the first admin, since approval otherwise requires an
existing admin token.

Usage:
    python -m backend.approve_account EMAIL
"""
import sys

from backend.core.errors import NotFoundError
from backend.database import Base, SessionLocal, engine
from backend.models import certificate, exam_result, fingerprint, user  # noqa: F401
from backend.services.identity_store import IdentityStore


def approve_by_email(email: str, session_factory=SessionLocal):
    db = session_factory()
    try:
        store = IdentityStore(db)
        account = store.find_by_email(email)
        if account is None:
            raise NotFoundError(f"No account registered for {email}")
        approved = store.set_approved(account.id)
        return approved.id, approved.role
    finally:
        db.close()


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: python -m backend.approve_account EMAIL", file=sys.stderr)
        sys.exit(2)

    Base.metadata.create_all(bind=engine)
    try:
        user_id, role = approve_by_email(args[0])
    except NotFoundError as exc:
        print(exc.message, file=sys.stderr)
        sys.exit(1)
    print(f"Approved account {user_id} ({role})")


if __name__ == "__main__":
    main()
