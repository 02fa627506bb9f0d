"""Print row counts for the progression tables (quick sanity check against a live DB)."""

import asyncio

from sqlalchemy import func, select

from app.db.session import async_session_maker, engine
from app.models import Exercise, Routine, RoutineExercise, WorkoutLog, WorkoutLogEntry

MODELS = [Exercise, Routine, RoutineExercise, WorkoutLog, WorkoutLogEntry]


async def check_data():
    async with async_session_maker() as session:
        for model in MODELS:
            count = (await session.execute(select(func.count()).select_from(model))).scalar()
            print(f"Table '{model.__tablename__}' row count: {count}")

        unfinished = (
            await session.execute(
                select(func.count()).select_from(WorkoutLog).where(WorkoutLog.finished_at.is_(None))
            )
        ).scalar()
        print(f"Unfinished workout logs: {unfinished}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
