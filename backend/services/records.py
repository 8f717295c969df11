# services/records.py
"""
CRUD over the four financial record kinds.

Every operation receives the caller's Identity explicitly. Records belonging to
another user are treated as absent, so get/update/delete answer NotFound and
listing another user's id returns nothing.
"""
from __future__ import annotations

import logging
from typing import List

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from auth import Identity
from core.errors import NotFound
from crud import (
    ExpenseRepository, IncomeRepository, InvestmentRepository, LoanRepository, RecordRepository,
)

log = logging.getLogger("uvicorn.error")


class RecordService:
    kind = "Record"

    def __init__(self, repository: RecordRepository):
        self.repository = repository

    def create(self, identity: Identity, fields: BaseModel):
        record = self.repository.model(**fields.model_dump(), user_id=identity.user_id)
        try:
            record = self.repository.save(record)
        except IntegrityError:
            # el único FK es user_id
            log.warning("%s sin dueño válido, user_id=%s", self.kind, identity.user_id)
            raise NotFound(f"User not found with id: {identity.user_id}")
        log.info("%s creado id=%s user_id=%s", self.kind, record.id, identity.user_id)
        return record

    def list_by_user(self, identity: Identity, user_id: int) -> List:
        if user_id != identity.user_id:
            log.warning(
                "user_id=%s pidió %s de user_id=%s", identity.user_id, self.kind, user_id
            )
            return []
        return self.repository.find_all_by_user_id(user_id)

    def get_by_id(self, identity: Identity, record_id: int):
        record = self.repository.find_by_id(record_id)
        if record is None or record.user_id != identity.user_id:
            raise NotFound(f"{self.kind} not found")
        return record

    def update(self, identity: Identity, record_id: int, changes: BaseModel):
        record = self.get_by_id(identity, record_id)
        incoming = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}
        for field, value in incoming.items():
            setattr(record, field, value)
        record = self.repository.save(record)
        log.info("%s actualizado id=%s campos=%s", self.kind, record_id, sorted(incoming))
        return record

    def delete(self, identity: Identity, record_id: int) -> str:
        self.get_by_id(identity, record_id)
        self.repository.delete_by_id(record_id)
        log.info("%s eliminado id=%s", self.kind, record_id)
        return f"{self.kind} deleted successfully"


class ExpenseService(RecordService):
    kind = "Expense"

    def __init__(self, repository: ExpenseRepository):
        super().__init__(repository)


class IncomeService(RecordService):
    kind = "Income"

    def __init__(self, repository: IncomeRepository):
        super().__init__(repository)


class InvestmentService(RecordService):
    kind = "Investment"

    def __init__(self, repository: InvestmentRepository):
        super().__init__(repository)


class LoanService(RecordService):
    kind = "Loan"

    def __init__(self, repository: LoanRepository):
        super().__init__(repository)
