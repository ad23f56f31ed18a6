"""Database seeder: sample records for every resource, for local development."""
import argparse
import asyncio
import time
from datetime import datetime

from campus_api.database import engine, async_session, Base
from campus_api.models import (
    Article,
    DiningCommonsMenuItem,
    HelpRequest,
    MenuItemReview,
    Organization,
    RecommendationRequest,
)


def _dt(value: str) -> datetime:
    return datetime.fromisoformat(value)


def sample_records() -> list:
    return [
        Article(title="Article 1", url="http://example.com/1", explanation="Explanation for article 1",
                email="user1@example.com", date_added=_dt("2022-01-02T12:00:00")),
        Article(title="Article 2", url="http://example.com/2", explanation="Explanation for article 2",
                email="user2@example.com", date_added=_dt("2022-04-03T12:00:00")),
        HelpRequest(requester_email="mike@ucsb.edu", team_id="Team 3", table_or_breakout_room="Table 6",
                    request_time=_dt("2024-02-26T15:09:48"), explanation="Pushing commits strip imports",
                    solved=False),
        HelpRequest(requester_email="lisa@ucsb.edu", team_id="Team 14", table_or_breakout_room="Breakout Room 4",
                    request_time=_dt("2025-03-21T15:09:48"),
                    explanation="Missing permission to access Git repository", solved=True),
        MenuItemReview(item_id=1, reviewer_email="exampleOne@example.com", stars=5,
                       date_reviewed=_dt("2022-01-02T12:00:00"), comments="supa yummy"),
        MenuItemReview(item_id=2, reviewer_email="exampleTwo@ucsb.edu", stars=3,
                       date_reviewed=_dt("2022-04-03T14:30:00"), comments="valid food item"),
        RecommendationRequest(requester_email="student@ucsb.edu", professor_email="prof@ucsb.edu",
                              explanation="Need letter for grad school",
                              date_requested=_dt("2024-11-01T10:00:00"),
                              date_needed=_dt("2024-12-01T10:00:00"), done=False),
        DiningCommonsMenuItem(dining_commons_code="CAR", name="Pancakes", station="Grill"),
        DiningCommonsMenuItem(dining_commons_code="DLG", name="Pie", station="Bakery"),
        Organization(org_code="SKY", org_translation_short="Skydiving",
                     org_translation="UCSB Skydiving Club", inactive=True),
        Organization(org_code="ROW", org_translation_short="Rowing",
                     org_translation="UCSB Rowing Club", inactive=False),
    ]


async def seed(reset: bool = False):
    start = time.perf_counter()

    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    records = sample_records()
    async with async_session() as session:
        for record in records:
            await session.merge(record)
        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"Seeded {len(records)} records in {elapsed:.2f}s")
    await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed the campus records database")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    args = parser.parse_args()
    asyncio.run(seed(reset=args.reset))


if __name__ == "__main__":
    main()
