from sqlalchemy import Column, Integer, String, Date, DateTime, Float, Numeric
from sqlalchemy.sql import func
from runninglog.db import Base


class RunData(Base):
    __tablename__ = "run_data"

    id = Column(Integer, primary_key=True, index=True)

    date = Column(Date, nullable=False, index=True)

    distance_km = Column(Numeric(6, 2), nullable=False)  # e.g. 10.05 km

    # Duration stored as **total seconds** (int)
    duration_seconds = Column(Integer, nullable=False)

    # Stored as entered ('5:12/km'); filled in from distance/duration if missing
    pace = Column(String(16), nullable=True)

    cadence = Column(Integer, nullable=True)  # steps per minute
    heart_rate = Column(Float, nullable=True)
    heart_rate_max = Column(Float, nullable=True)
    vo2max = Column(String(16), nullable=True)

    temperature = Column(Float, nullable=True)  # °C
    humidity = Column(Float, nullable=True)  # %

    # early_morning, morning, afternoon, evening
    time_of_day = Column(String(20), nullable=True)
    place = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
