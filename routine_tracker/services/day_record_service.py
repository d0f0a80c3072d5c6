"""DayRecord lookup and upsert helpers shared by lifecycle and completion code."""

from __future__ import annotations

import datetime
from typing import Dict, List

from sqlmodel import Session, select

from routine_tracker.models import DayRecord, DayRecordStatus, Routine, TaskCompletion
from routine_tracker.services.time_service import day_key


def find_day_record(db: Session, routine_id: int, date_value: datetime.date | datetime.datetime) -> DayRecord | None:
    day = day_key(date_value)
    return db.exec(
        select(DayRecord).where(DayRecord.routine_id == routine_id, DayRecord.date == day)
    ).first()


def get_or_create_day_record(db: Session, routine: Routine, date_value: datetime.date | datetime.datetime) -> DayRecord:
    # 日本語: (ルーチン, 日付) につき1件のみ / English: At most one record per (routine, day)
    day = day_key(date_value)
    record = find_day_record(db, routine.id, day)
    if record is None:
        record = DayRecord(routine_id=routine.id, date=day)
        routine.day_records.append(record)
        db.add(record)
    return record


def find_completion(record: DayRecord, task_id: int) -> TaskCompletion | None:
    for completion in record.completions:
        if completion.task_id == task_id:
            return completion
    return None


def day_records_between(
    db: Session, routine_id: int, start: datetime.date, end: datetime.date
) -> Dict[datetime.date, DayRecord]:
    records = db.exec(
        select(DayRecord).where(
            DayRecord.routine_id == routine_id,
            DayRecord.date >= start,
            DayRecord.date <= end,
        )
    ).all()
    return {record.date: record for record in records}


def stale_live_records(db: Session, routine_id: int, before: datetime.date) -> List[DayRecord]:
    records = db.exec(
        select(DayRecord).where(
            DayRecord.routine_id == routine_id,
            DayRecord.date < before,
            DayRecord.status == DayRecordStatus.LIVE.value,
        )
    ).all()
    return list(records)
