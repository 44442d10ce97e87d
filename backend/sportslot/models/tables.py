from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    Float,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class SlotState:
    DRAFT = "draft"
    PUBLISHED = "published"
    OUTSIDE_HOURS = "outside_hours"

    ALL = (DRAFT, PUBLISHED, OUTSIDE_HOURS)


class ClosureState:
    DRAFT = "draft"
    PUBLISHED = "published"

    ALL = (DRAFT, PUBLISHED)


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(frozen=True)
class PublishedSnapshot:
    """Last customer-visible position of a slot that has unpublished edits."""
    date: str
    time: str
    duration_minutes: int


class AppSettings(Base):
    __tablename__ = 'app_settings'

    id = Column(Text, primary_key=True, server_default=text("'main'"))
    default_slot_duration = Column(Integer, nullable=False, server_default=text('60'))
    default_max_capacity = Column(Integer, nullable=False, server_default=text('4'))
    default_price = Column(Float, nullable=False, server_default=text('50'))
    min_booking_advance = Column(Integer, nullable=False, server_default=text('0'))  # minutes
    data_version = Column(Integer, nullable=False, server_default=text('1'))


class Activities(Base):
    __tablename__ = 'activities'

    name = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    icon = Column(Text, nullable=False, server_default=text("''"))
    enabled = Column(Integer, nullable=False, server_default=text('1'))
    sort_order = Column(Integer, nullable=False, server_default=text('0'))

    slots = relationship('TimeSlots', back_populates='activity')


class WorkingHours(Base):
    __tablename__ = 'working_hours'

    day_of_week = Column(Integer, primary_key=True, autoincrement=False)  # 0 = Sunday
    enabled = Column(Integer, nullable=False, server_default=text('1'))
    start_time = Column(Text, nullable=False, server_default=text("'09:00'"))
    end_time = Column(Text, nullable=False, server_default=text("'18:00'"))

    __table_args__ = (
        CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_working_hours_day'),
    )


class ClosedPeriods(Base):
    __tablename__ = 'closed_periods'

    start_date = Column(Text, nullable=False)
    end_date = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    reason = Column(Text, nullable=False, server_default=text("''"))
    state = Column(Enum(*ClosureState.ALL, name='closure_state'), nullable=False, default=ClosureState.DRAFT)
    pending_deletion = Column(Integer, nullable=False, default=0, server_default=text('0'))
    created_at = Column(Text, default=_utcnow_iso)

    @property
    def published(self) -> bool:
        return self.state == ClosureState.PUBLISHED

    def covers(self, date_str: str) -> bool:
        return self.start_date <= date_str <= self.end_date


class TimeSlots(Base):
    __tablename__ = 'time_slots'

    activity_id = Column(ForeignKey('activities.id', ondelete='RESTRICT'), nullable=False, index=True)
    date = Column(Text, nullable=False)
    time = Column(Text, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    max_capacity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    id = Column(Integer, primary_key=True)
    current_bookings = Column(Integer, nullable=False, default=0, server_default=text('0'))
    state = Column(Enum(*SlotState.ALL, name='slot_state'), nullable=False, default=SlotState.DRAFT)
    pending_deletion = Column(Integer, nullable=False, default=0, server_default=text('0'))
    original_date = Column(Text)
    original_time = Column(Text)
    original_duration = Column(Integer)
    created_at = Column(Text, default=_utcnow_iso)

    activity = relationship('Activities', back_populates='slots')

    __table_args__ = (
        UniqueConstraint('date', 'time', 'activity_id', name='uq_slot_date_time_activity'),
        CheckConstraint(
            'current_bookings >= 0 AND current_bookings <= max_capacity',
            name='ck_slot_capacity',
        ),
        # Ids are never reused: bookings keep pointing at deleted slots
        {'sqlite_autoincrement': True},
    )

    @property
    def published(self) -> bool:
        return self.state == SlotState.PUBLISHED

    @property
    def outside_working_hours(self) -> bool:
        return self.state == SlotState.OUTSIDE_HOURS

    @property
    def snapshot(self) -> PublishedSnapshot | None:
        if self.original_date is None:
            return None
        return PublishedSnapshot(
            date=self.original_date,
            time=self.original_time,
            duration_minutes=self.original_duration,
        )

    @snapshot.setter
    def snapshot(self, value: PublishedSnapshot | None) -> None:
        if value is None:
            self.original_date = None
            self.original_time = None
            self.original_duration = None
        else:
            self.original_date = value.date
            self.original_time = value.time
            self.original_duration = value.duration_minutes

    @property
    def available_places(self) -> int:
        return self.max_capacity - self.current_bookings


class Bookings(Base):
    __tablename__ = 'bookings'

    # No FK: bookings outlive the slot they were taken on
    slot_id = Column(Integer, nullable=False, index=True)
    activity_id = Column(Integer, nullable=False)
    activity_name = Column(Text, nullable=False)
    customer_name = Column(Text, nullable=False)
    customer_email = Column(Text, nullable=False)
    number_of_people = Column(Integer, nullable=False)
    total_price = Column(Float, nullable=False)
    date = Column(Text, nullable=False)
    time = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    customer_phone = Column(Text, nullable=False, server_default=text("''"))
    created_at = Column(Text, nullable=False, default=_utcnow_iso)

    __table_args__ = (
        CheckConstraint('number_of_people > 0', name='ck_booking_people'),
    )
