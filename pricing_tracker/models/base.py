"""
Declarative base shared by every stored record.

Each table gets an integer key, a uuid for exports and created/updated
timestamps. Owned records add their own ``profile_id``.
"""

import uuid as uuid_lib
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base

from pricing_tracker.utils.datetime_utils import utc_now

Base = declarative_base()

# Never written by update_from_dict()
PROTECTED_COLUMNS = ("id", "uuid", "profile_id", "created_at", "updated_at")


def _new_uuid() -> str:
    return str(uuid_lib.uuid4())


class BaseModel(Base):
    """
    Abstract parent of the pricing records.

    Subclasses only declare their own columns and relationships; identity,
    timestamps and the dict helpers come from here.
    """

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(36), unique=True, nullable=False, default=_new_uuid, index=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """
        Column values as a JSON-safe dictionary.

        Datetimes are ISO strings and Decimals are strings, so money keeps
        its exact value.
        """
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            elif isinstance(value, Decimal):
                value = str(value)
            data[column.name] = value
        return data

    def update_from_dict(self, data: Dict[str, Any]) -> None:
        """
        Copy matching keys of ``data`` onto the record's columns.

        Keys that are not columns, and the protected identity, owner and
        timestamp columns, are ignored.
        """
        editable = [c.name for c in self.__table__.columns if c.name not in PROTECTED_COLUMNS]
        for name in editable:
            if name in data:
                setattr(self, name, data[name])
        self.updated_at = utc_now()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"
