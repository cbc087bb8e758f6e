"""Utilities for ensuring string primary keys are populated."""
from __future__ import annotations

import uuid
from typing import Type

from sqlalchemy import event
from sqlalchemy.orm import Mapper


def new_id() -> str:
    return str(uuid.uuid4())


def register_uuid_pk_listener(model: Type[object], pk_name: str = "id") -> None:
    """Ensure ``model`` receives a UUID4 string primary key before insert.

    Records are identified by opaque, globally unique strings so that a client
    holding a board snapshot can address a task without knowing anything about
    the backing database. The listener only assigns a value when the caller did
    not provide one, which keeps explicitly chosen ids (fixtures, imports) intact.
    """

    table = getattr(model, "__table__", None)
    if table is None or pk_name not in table.c:
        raise ValueError(f"Model {model!r} does not expose a '{pk_name}' column")

    @event.listens_for(model, "before_insert", propagate=True)
    def _assign_uuid_pk(_: Mapper, connection, target) -> None:  # pragma: no cover - SQLAlchemy callback
        if getattr(target, pk_name) is not None:
            return
        setattr(target, pk_name, new_id())
