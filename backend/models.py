# backend/models.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, func

from db import Base


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        # sin hashed_password
        return f"User(id={self.id!r}, email={self.email!r})"


def _owner():
    return Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


class Expense(Base):
    __tablename__ = "expenses"
    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(500), nullable=False)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False)
    payment_mode = Column(String(50), nullable=False)
    user_id = _owner()


class Income(Base):
    __tablename__ = "incomes"
    id = Column(Integer, primary_key=True, index=True)
    source = Column(String(255), nullable=False)
    description = Column(String(500), nullable=False)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False)
    user_id = _owner()


class Investment(Base):
    __tablename__ = "investments"
    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(100), nullable=False)  # Mutual Fund, Stock, FD...
    institution = Column(String(255), nullable=False)
    description = Column(String(500), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False)
    user_id = _owner()


class Loan(Base):
    __tablename__ = "loans"
    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(100), nullable=False)  # Home, Personal, Education...
    lender = Column(String(255), nullable=False)
    description = Column(String(500), nullable=False)
    principal = Column(Numeric(14, 2), nullable=False)
    interest_rate = Column(Numeric(8, 4), nullable=False)  # porcentaje anual
    emi = Column(Numeric(14, 2), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    user_id = _owner()
