import datetime as dt
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    # camelCase en JSON, snake_case también aceptado al entrar
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def _not_future(v: Optional[dt.date]) -> Optional[dt.date]:
    if v is not None and v > dt.date.today():
        raise ValueError("Date cannot be in the future")
    return v


PastOrToday = Annotated[dt.date, AfterValidator(_not_future)]

# mismas precisiones que las columnas Numeric(14,2) y Numeric(8,4)
Money = Annotated[Decimal, Field(gt=0, max_digits=14, decimal_places=2)]
Rate = Annotated[Decimal, Field(gt=0, max_digits=8, decimal_places=4)]


# -------- Auth / User --------
class RegisterRequest(ApiModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    full_name: str = Field(min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=30)


class LoginInput(ApiModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AuthResponse(ApiModel):
    token: str
    type: str = "Bearer"
    access_token: str = Field(alias="access_token")
    token_type: str = Field(default="bearer", alias="token_type")
    id: int
    email: EmailStr
    full_name: str


class ProfileOut(ApiModel):
    id: int
    email: EmailStr
    full_name: str
    phone: Optional[str] = None


class UpdateProfileIn(ApiModel):
    full_name: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=30)


# -------- Expense --------
class ExpenseCreate(ApiModel):
    description: str = Field(min_length=1, max_length=500)
    category: str = Field(min_length=1, max_length=100)
    amount: Money
    date: PastOrToday
    payment_mode: str = Field(min_length=1, max_length=50)


class ExpenseUpdate(ApiModel):
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    amount: Optional[Money] = None
    date: Optional[PastOrToday] = None
    payment_mode: Optional[str] = Field(default=None, min_length=1, max_length=50)


class ExpenseOut(ApiModel):
    id: int
    description: str
    category: str
    amount: float
    date: dt.date
    payment_mode: str
    user_id: int


# -------- Income --------
class IncomeCreate(ApiModel):
    source: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=50)
    amount: Money
    date: dt.date


class IncomeUpdate(ApiModel):
    source: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=50)
    amount: Optional[Money] = None
    date: Optional[dt.date] = None


class IncomeOut(ApiModel):
    id: int
    source: str
    description: str
    category: str
    amount: float
    date: dt.date
    user_id: int


# -------- Investment --------
class InvestmentCreate(ApiModel):
    type: str = Field(min_length=1, max_length=100)
    institution: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=500)
    amount: Money
    date: dt.date


class InvestmentUpdate(ApiModel):
    type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    institution: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    amount: Optional[Money] = None
    date: Optional[dt.date] = None


class InvestmentOut(ApiModel):
    id: int
    type: str
    institution: str
    description: str
    amount: float
    date: dt.date
    user_id: int


# -------- Loan --------
class LoanCreate(ApiModel):
    type: str = Field(min_length=1, max_length=100)
    lender: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=500)
    principal: Money
    interest_rate: Rate
    emi: Money
    start_date: dt.date
    end_date: dt.date


class LoanUpdate(ApiModel):
    type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    lender: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    principal: Optional[Money] = None
    interest_rate: Optional[Rate] = None
    emi: Optional[Money] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None


class LoanOut(ApiModel):
    id: int
    type: str
    lender: str
    description: str
    principal: float
    interest_rate: float
    emi: float
    start_date: dt.date
    end_date: dt.date
    user_id: int


class DeleteOut(BaseModel):
    ok: bool = True
    message: str
