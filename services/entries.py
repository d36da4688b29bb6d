"""
Ledger entry service: CRUD and aggregates for Expense and Income rows.

Every read, write and aggregate goes through the ownership guard or filters on the
principal, so a user only ever sees their own rows.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func

from services.ownership import get_owned_or_raise, owned_by, stamp_owner
from services.principal import Principal

ENTRY_FIELDS = ("title", "category", "amount", "note")


class EntryService:
    def __init__(self, storage, model, date_field: str):
        self.storage = storage
        self.model = model
        self.date_field = date_field

    @property
    def session(self):
        return self.storage.get_session()

    @property
    def date_column(self):
        return getattr(self.model, self.date_field)

    def _own(self, principal: Principal):
        return owned_by(self.session.query(self.model), self.model, principal)

    def _apply(self, row, data: dict):
        for field in ENTRY_FIELDS + (self.date_field,):
            if field in data:
                setattr(row, field, data[field])
        return row

    def create(self, principal: Principal, data: dict):
        row = stamp_owner(self._apply(self.model(), data), principal)
        self.storage.new(row)
        self.storage.save()
        return row

    def list(self, principal: Principal) -> List:
        return self._own(principal).order_by(self.date_column.desc(), self.model.id.desc()).all()

    def get(self, principal: Principal, row_id: int):
        return get_owned_or_raise(self.session, self.model, row_id, principal)

    def update(self, principal: Principal, row_id: int, data: dict):
        row = self._apply(self.get(principal, row_id), data)
        self.storage.new(row)
        self.storage.save()
        return row

    def delete(self, principal: Principal, row_id: int) -> None:
        row = self.get(principal, row_id)
        self.storage.delete(row)
        self.storage.save()

    def by_category(self, principal: Principal, category: str) -> List:
        return (
            self._own(principal)
            .filter(self.model.category == category)
            .order_by(self.date_column.desc())
            .all()
        )

    def by_date_range(self, principal: Principal, start: date, end: date) -> List:
        return (
            self._own(principal)
            .filter(self.date_column.between(start, end))
            .order_by(self.date_column.desc())
            .all()
        )

    def total(self, principal: Principal, category: Optional[str] = None) -> Decimal:
        query = self.session.query(func.coalesce(func.sum(self.model.amount), 0)).filter(
            self.model.user_id == principal.id
        )
        if category is not None:
            query = query.filter(self.model.category == category)
        return Decimal(str(query.scalar())).quantize(Decimal("0.01"))

    def count(self, principal: Principal) -> int:
        return self._own(principal).count()
