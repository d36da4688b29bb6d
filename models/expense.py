from sqlalchemy import (
    Column,
    String,
    Integer,
    ForeignKey,
    Date,
    Numeric,
    Text,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class Expense(BaseModel, Base):
    __tablename__ = "expenses"

    # Owner is stamped from the authenticated principal at creation and never reassigned
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    category = Column(String(50), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    expense_date = Column(Date, nullable=False)
    note = Column(Text, nullable=True)

    user = relationship("User", back_populates="expenses")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expenses_amount_positive"),
        Index("ix_expenses_user_category", "user_id", "category"),
        Index("ix_expenses_user_date", "user_id", "expense_date"),
    )
