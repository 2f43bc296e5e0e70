"""
db.models - SQLAlchemy ORM declarations.

Tables
------
parts   - one row per unique part number.  Every attribute is TEXT and
          the column names match the JSON keys the front end exchanges
          (partNumber, deviceName, …).
"""

from __future__ import annotations

from sqlalchemy import Column, Text
from sqlalchemy.orm import DeclarativeBase

from db.records import PartRecord


class Base(DeclarativeBase):
    pass


class Part(Base):
    __tablename__ = "parts"

    # ── Primary key ────────────────────────────────────────────────────
    part_number = Column("partNumber", Text, key="part_number", primary_key=True)

    # ── Attributes ─────────────────────────────────────────────────────
    device_name        = Column("deviceName", Text, key="device_name", default="")
    device_type        = Column("deviceType", Text, key="device_type", default="")
    value              = Column("value", Text, default="")
    positive_tolerance = Column("positiveTolerance", Text, key="positive_tolerance", default="")
    negative_tolerance = Column("negativeTolerance", Text, key="negative_tolerance", default="")
    case_name          = Column("caseName", Text, key="case_name", default="")
    case_identifier    = Column("caseIdentifier", Text, key="case_identifier", default="")

    # ── Conversion ─────────────────────────────────────────────────────
    def to_record(self) -> PartRecord:
        return PartRecord(
            part_number=self.part_number,
            device_type=self.device_type or "",
            device_name=self.device_name or "",
            value=self.value or "",
            positive_tolerance=self.positive_tolerance or "",
            negative_tolerance=self.negative_tolerance or "",
            case_name=self.case_name or "",
            case_identifier=self.case_identifier or "",
        )
