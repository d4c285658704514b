"""SQLAlchemy models — Plant."""

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from plantwatch.models.base import Base


class Plant(Base):
    __tablename__ = "plants"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    weekly_water_need: Mapped[float] = mapped_column(Float, nullable=False)
    expected_humidity: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Plant {self.name!r} water={self.weekly_water_need}L/week "
            f"humidity={self.expected_humidity}%>"
        )
