"""
Ownership guard for user-scoped rows (expenses, incomes).

A missing row is NotFound; a row owned by someone else is Forbidden. Owners are always
taken from the authenticated principal, never from request bodies.
"""
from __future__ import annotations

import logging

from services.principal import Principal
from utils.exceptions import Forbidden, NotFound

logger = logging.getLogger(__name__)


def get_owned_or_raise(session, model, row_id: int, principal: Principal):
    label = model.__name__
    row = session.get(model, row_id)
    if row is None:
        raise NotFound(f"{label} not found with id: {row_id}")
    if row.user_id != principal.id:
        logger.warning("User %s denied access to %s %s", principal.id, label, row_id)
        raise Forbidden(f"You don't have permission to access this {label.lower()}")
    return row


def stamp_owner(row, principal: Principal):
    row.user_id = principal.id
    return row


def owned_by(query, model, principal: Principal):
    """Restrict a query on ``model`` to the principal's rows."""
    return query.filter(model.user_id == principal.id)
