"""
Demo backend persistence - SQLAlchemy ORM models and database setup.
"""

import logging

from sqlalchemy import Column, Date, ForeignKey, Integer, Text, UniqueConstraint, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("menuhub.database")

# Create SQLAlchemy Base
Base = declarative_base()


class MenuRecord(Base):
    """One menu per calendar date"""

    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)

    meals = relationship(
        "MealRecord",
        back_populates="menu",
        cascade="all, delete-orphan",
        order_by="MealRecord.id",
    )


class MealRecord(Base):
    """Breakfast, lunch or dinner of a menu"""

    __tablename__ = "meal"
    __table_args__ = (UniqueConstraint("menu_id", "type", name="uq_meal_menu_type"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    menu_id = Column(Integer, ForeignKey("menu.id", ondelete="CASCADE"), nullable=False)
    type = Column(Text, nullable=False)  # breakfast, lunch, dinner

    menu = relationship("MenuRecord", back_populates="meals")
    items = relationship(
        "MealItemRecord",
        back_populates="meal",
        cascade="all, delete-orphan",
        order_by="MealItemRecord.id",
    )


class MealItemRecord(Base):
    """A dish"""

    __tablename__ = "meal_item"

    id = Column(Integer, primary_key=True, autoincrement=True)
    meal_id = Column(Integer, ForeignKey("meal.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)

    meal = relationship("MealRecord", back_populates="items")
    allergens = relationship(
        "MealItemAllergenRecord",
        back_populates="meal_item",
        cascade="all, delete-orphan",
        order_by="MealItemAllergenRecord.allergen_id",
    )


class AllergenRecord(Base):
    """Allergen master table"""

    __tablename__ = "allergen"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)


class MealItemAllergenRecord(Base):
    """Join record between a dish and one of its allergens"""

    __tablename__ = "meal_item_allergen"

    meal_item_id = Column(
        Integer, ForeignKey("meal_item.id", ondelete="CASCADE"), primary_key=True
    )
    allergen_id = Column(
        Integer, ForeignKey("allergen.id", ondelete="CASCADE"), primary_key=True
    )

    meal_item = relationship("MealItemRecord", back_populates="allergens")
    allergen = relationship("AllergenRecord")


def make_engine(db_url: str) -> Engine:
    """Create the engine; in-memory SQLite shares one connection across threads."""
    if not db_url.startswith("sqlite"):
        return create_engine(db_url, future=True)
    if db_url == "sqlite://" or ":memory:" in db_url:
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
    return create_engine(db_url, connect_args={"check_same_thread": False}, future=True)


def init_database(engine: Engine) -> sessionmaker:
    """Create the schema and return a session factory bound to the engine."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")
    return sessionmaker(bind=engine, future=True, expire_on_commit=False)
