from sqlalchemy import Column, Integer, String, DateTime, Float
from sqlalchemy.sql import func
from fittracker.db import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)

    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)

    age = Column(Integer, nullable=True)
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)

    # Goals
    weekly_workout_goal = Column(Integer, nullable=False, server_default="4")
    target_weight = Column(Float, nullable=True)
    primary_goal = Column(String(30), nullable=False, server_default="general")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
