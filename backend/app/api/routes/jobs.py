"""Job Board — batch import from the automation bridge and recent listings."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.schemas.jobs import JobImportRequest, JobImportResponse, JobListingResponse
from app.services.job_import import import_jobs, list_recent_jobs

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.post("/import", response_model=JobImportResponse)
async def import_job_listings(
    body: JobImportRequest, db: AsyncSession = Depends(get_db),
):
    imported = await import_jobs(db, body.items)
    return JobImportResponse(imported=imported)


@router.get("", response_model=list[JobListingResponse])
async def list_jobs(db: AsyncSession = Depends(get_db)):
    """30 most recently imported listings, newest first."""
    return await list_recent_jobs(db)
