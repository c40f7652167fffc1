"""
User handlers.
"""

from storefront.database import Database
from storefront.models import User
from storefront.routes.common import apply_update, delete_row, log_failures, require_row
from storefront.schemas import CreateUserInput, DeleteInput, GetByIdInput, UpdateUserInput
from storefront.utils.helpers import next_timestamp, parse_timestamp, to_timestamp_text


@log_failures("User creation")
def create_user(db: Database, data: CreateUserInput) -> User:
    now = to_timestamp_text(next_timestamp())
    uid = db.execute(
        "INSERT INTO users (name, email, role, is_active, created_at, updated_at) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        (data.name, str(data.email), data.role, int(data.is_active), now, now),
    )
    return User.from_row(db.query("SELECT * FROM users WHERE id = ?", (uid,), one=True))


@log_failures("Fetching users")
def get_users(db: Database) -> list[User]:
    rows = db.query("SELECT * FROM users ORDER BY id")
    return [User.from_row(r) for r in rows]


@log_failures("Fetching user by id")
def get_user_by_id(db: Database, data: GetByIdInput) -> User | None:
    row = db.query("SELECT * FROM users WHERE id = ?", (data.id,), one=True)
    return User.from_row(row) if row else None


@log_failures("User update")
def update_user(db: Database, data: UpdateUserInput) -> User:
    existing = require_row(db, "users", "User", data.id)

    values = data.changes()
    if "email" in values:
        values["email"] = str(values["email"])
    if "is_active" in values:
        values["is_active"] = int(values["is_active"])
    values["updated_at"] = to_timestamp_text(
        next_timestamp(parse_timestamp(existing["updated_at"]))
    )

    return User.from_row(apply_update(db, "users", data.id, values))


@log_failures("User deletion")
def delete_user(db: Database, data: DeleteInput) -> dict:
    return delete_row(db, "users", data.id)
