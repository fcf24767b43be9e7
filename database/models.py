"""
SQLAlchemy ORM models for users, categories and transactions.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False)
    display_name = Column(String(128), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    transactions = relationship("Transaction", back_populates="user", cascade="all, delete-orphan")

    # Email is unique among live accounts only; soft-deleted rows keep theirs.
    __table_args__ = (
        Index(
            "uq_users_email_active",
            "email",
            unique=True,
            postgresql_where=deleted_at.is_(None),
            sqlite_where=deleted_at.is_(None),
        ),
    )

    def __repr__(self) -> str:
        return f"User(user_id={self.user_id!s}, email={self.email!r})"


class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False)
    icon = Column(String(16))
    color = Column(String(16))
    type = Column(String(16), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint("type IN ('income', 'expense')", name="ck_categories_type"),
    )


class Transaction(Base):
    __tablename__ = "transactions"

    transaction_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String(16), nullable=False)
    description = Column(Text)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    user = relationship("User", back_populates="transactions")
    category = relationship("Category")

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_transactions_amount"),
        CheckConstraint("type IN ('income', 'expense')", name="ck_transactions_type"),
    )


DEFAULT_CATEGORIES = [
    {"name": "Food & Dining", "type": "expense", "icon": "🍔", "color": "#FF6B6B"},
    {"name": "Transportation", "type": "expense", "icon": "🚗", "color": "#4ECDC4"},
    {"name": "Shopping", "type": "expense", "icon": "🛍️", "color": "#45B7D1"},
    {"name": "Entertainment", "type": "expense", "icon": "🎮", "color": "#96CEB4"},
    {"name": "Bills & Utilities", "type": "expense", "icon": "📱", "color": "#FFEAA7"},
    {"name": "Healthcare", "type": "expense", "icon": "🏥", "color": "#FD79A8"},
    {"name": "Education", "type": "expense", "icon": "📚", "color": "#A0E7E5"},
    {"name": "Others", "type": "expense", "icon": "📦", "color": "#B2B2B2"},
    {"name": "Salary", "type": "income", "icon": "💰", "color": "#00B894"},
    {"name": "Freelance", "type": "income", "icon": "💼", "color": "#00B894"},
    {"name": "Investment", "type": "income", "icon": "📈", "color": "#00B894"},
    {"name": "Others", "type": "income", "icon": "💵", "color": "#00B894"},
]
