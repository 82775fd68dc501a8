"""Users collection stored in a SQL table through SQLAlchemy."""
from __future__ import annotations

import copy

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from users_api.db.models import UserRecordRow
from users_api.db.session import Base, DatabaseNotConfigured, get_engine, get_session
from users_api.repositories.base import StoreReadError, StoreWriteError

_FAULTS = (SQLAlchemyError, DatabaseNotConfigured)


class SQLUserStore:
    """Same load/save contract as the JSON store, one row per array element."""

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(bind=get_engine())
        except _FAULTS as exc:
            raise StoreWriteError(f"Could not create tables: {exc}") from exc

    def load(self) -> list:
        try:
            with get_session() as session:
                rows = session.execute(select(UserRecordRow).order_by(UserRecordRow.position)).scalars().all()
                return [copy.deepcopy(row.payload) for row in rows]
        except _FAULTS as exc:
            raise StoreReadError(f"Could not read users table: {exc}") from exc

    def save(self, users: list) -> None:
        try:
            with get_session() as session:
                session.execute(delete(UserRecordRow))
                session.add_all(
                    UserRecordRow(position=position, payload=record)
                    for position, record in enumerate(users)
                )
                session.commit()
        except _FAULTS as exc:
            raise StoreWriteError(f"Could not write users table: {exc}") from exc
