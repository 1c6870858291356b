import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String
from sqlalchemy.orm import validates

from .db import Base
from .normalize import normalize_email, normalize_title


def utcnow():
    return datetime.now(timezone.utc)


class Role(str, enum.Enum):
    CHEF = "chef"
    USER = "user"


class User(Base):
    """A registered account.

    The password is stored and compared as plain text. There is no hashing
    and no session: callers identify themselves by ``user_id`` alone.
    """

    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(20), unique=True, index=True, nullable=False)
    fullname = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value)
    phone = Column(String(50), nullable=True)
    created_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    @property
    def is_chef(self):
        return self.role == Role.CHEF.value

    @validates("email")
    def _normalize_email(self, key, value):
        return normalize_email(value)


class Recipe(Base):
    __tablename__ = "recipes"
    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(String(20), unique=True, index=True, nullable=False)
    user_id = Column(String(20), index=True, nullable=False)
    owner_id = Column(String(20), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    chef = Column(String(200), nullable=False)
    # casefolded copies of chef/title, compared by the duplicate-title check
    chef_key = Column(String(200), index=True, nullable=False)
    title_key = Column(String(200), index=True, nullable=False)
    ingredients = Column(JSON, nullable=False, default=list)
    instructions = Column(JSON, nullable=False, default=list)
    meal_type = Column(String(50), nullable=True)
    cuisine_type = Column(String(50), nullable=True)
    prep_time = Column(Integer, nullable=True)  # minutes
    difficulty = Column(String(50), nullable=True)
    servings = Column(Integer, nullable=True)
    created_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    @validates("chef", "title")
    def _sync_key(self, key, value):
        setattr(self, f"{key}_key", normalize_title(value))
        return value


class InventoryItem(Base):
    __tablename__ = "inventory"
    id = Column(Integer, primary_key=True, index=True)
    inventory_id = Column(String(20), unique=True, index=True, nullable=False)
    user_id = Column(String(20), index=True, nullable=False)
    added_by = Column(String(20), nullable=False)
    ingredient_name = Column(String(200), nullable=False)
    quantity = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)
    category = Column(String(100), nullable=True)
    purchase_date = Column(DateTime(timezone=True), nullable=True)
    expiration_date = Column(DateTime(timezone=True), nullable=True)
    location = Column(String(100), nullable=True)
    cost = Column(Float, nullable=True)
    created_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class IdSequence(Base):
    """Last number handed out for one id prefix, e.g. ``R`` -> 42."""

    __tablename__ = "id_sequences"
    id = Column(Integer, primary_key=True)
    prefix = Column(String(10), unique=True, nullable=False)
    last_value = Column(Integer, nullable=False, default=0)
