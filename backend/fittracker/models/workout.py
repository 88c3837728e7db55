from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey
from sqlalchemy.sql import func
from fittracker.db import Base

class Workout(Base):
    __tablename__ = "workouts"
    # ids are never reused, even on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # running, cycling, strength, swimming, yoga, cardio, other
    type = Column(String(20), nullable=False, server_default="other")
    name = Column(String, nullable=True)

    # Kept as the strings the client sends: 'YYYY-MM-DD' and 'HH:MM'
    date = Column(String(10), nullable=False, index=True)
    time = Column(String(5), nullable=False)

    duration = Column(Integer, nullable=False)  # minutes
    distance = Column(Float, nullable=True)  # miles, or reps for strength
    calories = Column(Integer, nullable=True)
    notes = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
