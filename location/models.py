from __future__ import annotations
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, ForeignKey
from core.database import Base


class Country(Base):
    __tablename__ = "countries"

    id: Mapped[str] = mapped_column(String(2), primary_key=True)
    name: Mapped[str] = mapped_column(String(40), nullable=False)

    locations = relationship("Location", back_populates="country")


# reference data, read-only for the API
class Location(Base):
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(primary_key=True)
    street_address: Mapped[Optional[str]] = mapped_column(String(40))
    postal_code: Mapped[Optional[str]] = mapped_column(String(12))
    city: Mapped[str] = mapped_column(String(30), nullable=False)
    state_province: Mapped[Optional[str]] = mapped_column(String(25))
    country_id: Mapped[Optional[str]] = mapped_column(ForeignKey("countries.id"), index=True)

    country = relationship("Country", back_populates="locations")
