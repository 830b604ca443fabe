import asyncio
import os
import sys

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import select

from app.db.session import async_session_maker, engine
from app.models.personal_record import PersonalRecord
from app.schemas.record import PersonalRecordRead
from app.services.pr_detection import find_duplicate_current_records, format_record_value


async def check_records() -> int:
    """Report keys with more than one current personal record. Returns the number of such keys."""
    async with async_session_maker() as session:
        result = await session.execute(select(PersonalRecord).where(PersonalRecord.is_current.is_(True)))
        records = [PersonalRecordRead.model_validate(r) for r in result.scalars().all()]

    print(f"Checked {len(records)} current records")
    duplicates = find_duplicate_current_records(records)
    for (user_id, name, exercise_type, reps), group in duplicates.items():
        label = f"{name} ({exercise_type.value}{f', {reps} reps' if reps else ''})"
        print(f"User {user_id}: {len(group)} current records for {label}")
        for record in sorted(group, key=lambda r: r.achieved_at):
            print(f"  {record.id} {record.achieved_at.isoformat()} {format_record_value(record)}")
    if not duplicates:
        print("No duplicate current records.")
    await engine.dispose()
    return len(duplicates)


if __name__ == "__main__":
    sys.exit(1 if asyncio.run(check_records()) else 0)
