"""Routine domain SQLModel models."""

import datetime
import enum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel


class RoutineOrigin(str, enum.Enum):
    PRESET = "preset"
    CUSTOM = "custom"


class DayRecordStatus(str, enum.Enum):
    # 日本語: 当日進行中の記録 / English: Record of the day still being played
    LIVE = "live"
    # 日本語: 日付確定済みのスナップショット / English: Immutable snapshot after rollover
    FINALIZED = "finalized"


class CompletionState(str, enum.Enum):
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


# 日本語: 毎日実行するルーチンの親エンティティ / English: Parent entity for the daily routine
class Routine(SQLModel, table=True):
    __tablename__ = "routine"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    origin: str = Field(default=RoutineOrigin.CUSTOM.value, max_length=20)
    is_active: bool = Field(default=False, index=True)
    # 日本語: ルーチンが「実行中」とみなされ始める日 / English: Day the routine starts counting as running
    start_date: datetime.date | None = Field(default=None)
    bio: str | None = Field(default=None, max_length=500)
    image_name: str | None = Field(default=None, max_length=100)
    created_at: datetime.datetime = Field(default_factory=_utcnow)

    tasks: list["Task"] = Relationship(
        back_populates="routine",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "Task.order_index"},
    )
    day_records: list["DayRecord"] = Relationship(
        back_populates="routine", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


# 日本語: ルーチンを構成する時刻付きタスク / English: Timed step inside a routine
class Task(SQLModel, table=True):
    __tablename__ = "task"

    id: int | None = Field(default=None, primary_key=True)
    routine_id: int = Field(foreign_key="routine.id", index=True)
    title: str = Field(max_length=100)
    # 日本語: "HH:MM" 形式、日付部分は持たない / English: "HH:MM", no date part
    time: str = Field(default="00:00", max_length=10)
    order_index: int = Field(default=0)
    # 日本語: 当日の表示用フラグ、履歴ではない / English: Live-day mirror only, not history
    is_completed_today: bool = Field(default=False)

    routine: Routine | None = Relationship(back_populates="tasks")


# 日本語: ルーチン×日付ごとの実績 / English: Per-routine, per-day result
class DayRecord(SQLModel, table=True):
    __tablename__ = "day_record"
    __table_args__ = (UniqueConstraint("routine_id", "date", name="uq_day_record_routine_date"),)

    id: int | None = Field(default=None, primary_key=True)
    routine_id: int = Field(foreign_key="routine.id", index=True)
    date: datetime.date
    completed_count: int = Field(default=0)
    status: str = Field(default=DayRecordStatus.LIVE.value, max_length=20)

    routine: Routine | None = Relationship(back_populates="day_records")
    completions: list["TaskCompletion"] = Relationship(
        back_populates="day_record", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    @property
    def is_finalized(self) -> bool:
        return self.status == DayRecordStatus.FINALIZED


# 日本語: 1日分のタスク結果スナップショット / English: Snapshot of one task's outcome for a day
class TaskCompletion(SQLModel, table=True):
    __tablename__ = "task_completion"
    __table_args__ = (
        UniqueConstraint("day_record_id", "task_id", name="uq_task_completion_record_task"),
    )

    id: int | None = Field(default=None, primary_key=True)
    day_record_id: int = Field(foreign_key="day_record.id", index=True)
    # 日本語: タスク削除後も残るため外部キーにしない / English: Plain reference; the task may be deleted later
    task_id: int
    task_title: str = Field(max_length=100)
    order_index: int = Field(default=0)
    state: str = Field(default=CompletionState.COMPLETED.value, max_length=20)

    day_record: DayRecord | None = Relationship(back_populates="completions")
