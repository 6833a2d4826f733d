"""Job Import — idempotent batch upsert of job listings keyed by url.

Invariants:
    - All items of a batch commit together or not at all
    - url is the natural key: re-importing a url updates the existing listing
    - Omitted optional fields reset to NULL on update (re-import replaces)

Design Decisions:
    - Select-then-write per item instead of dialect-specific ON CONFLICT:
      runs unchanged on PostgreSQL and SQLite; autoflush makes a url repeated
      inside one batch resolve to the row inserted earlier in that batch
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.job_listing import JobListing
from app.schemas.jobs import JobItem

logger = logging.getLogger(__name__)

RECENT_JOBS_LIMIT = 30


def _listing_fields(item: JobItem) -> dict:
    return {
        "title": item.title,
        "company": item.company,
        "location": item.location,
        "source": item.source,
        "published_at": item.published_at,
        "tags": item.tags,
    }


async def import_jobs(db: AsyncSession, items: list[JobItem]) -> int:
    """Upsert every item by url in a single transaction; returns items written."""
    for item in items:
        url = item.url
        result = await db.execute(select(JobListing).where(JobListing.url == url))
        listing = result.scalar_one_or_none()
        if listing:
            for name, value in _listing_fields(item).items():
                setattr(listing, name, value)
        else:
            db.add(JobListing(url=url, **_listing_fields(item)))
    await db.commit()
    logger.info(f"Imported {len(items)} job listing(s)")
    return len(items)


async def list_recent_jobs(
    db: AsyncSession, limit: int = RECENT_JOBS_LIMIT,
) -> list[JobListing]:
    result = await db.execute(
        select(JobListing).order_by(JobListing.created_at.desc()).limit(limit),
    )
    return list(result.scalars().all())
