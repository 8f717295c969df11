from typing import List, Optional

from sqlalchemy.orm import Session

from models import Expense, Income, Investment, Loan, User


# --------- Usuarios ----------
class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def save(self, user: User) -> User:
        try:
            self.db.add(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user


# --------- Registros financieros ----------
class RecordRepository:
    """Keyed collection of one record kind, queryable by owning user."""

    model = None

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, record_id: int):
        return self.db.get(self.model, record_id)

    def find_all_by_user_id(self, user_id: int) -> List:
        return (
            self.db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.id.asc())
            .all()
        )

    def save(self, record):
        try:
            self.db.add(record)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(record)
        return record

    def exists_by_id(self, record_id: int) -> bool:
        return self.db.query(self.model.id).filter(self.model.id == record_id).first() is not None

    def delete_by_id(self, record_id: int) -> None:
        try:
            self.db.query(self.model).filter(self.model.id == record_id).delete()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


class ExpenseRepository(RecordRepository):
    model = Expense


class IncomeRepository(RecordRepository):
    model = Income


class InvestmentRepository(RecordRepository):
    model = Investment


class LoanRepository(RecordRepository):
    model = Loan
