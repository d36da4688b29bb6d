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


class Income(BaseModel, Base):
    __tablename__ = "incomes"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    category = Column(String(50), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    income_date = Column(Date, nullable=False)
    note = Column(Text, nullable=True)

    user = relationship("User", back_populates="incomes")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_incomes_amount_positive"),
        Index("ix_incomes_user_category", "user_id", "category"),
        Index("ix_incomes_user_date", "user_id", "income_date"),
    )
