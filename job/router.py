from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from .schema import (
    JobCreated,
    JobDescriptionOut,
    JobDetail,
    JobEmployees,
    JobList,
    JobPayload,
    JobStats,
)
from . import service

job_router = APIRouter(prefix="/jobs", tags=["Jobs"])

# List jobs with their head count
@job_router.get("", response_model=JobList)
def list_jobs(db: Session = Depends(get_db)):
    return {"data": service.list_jobs(db)}

@job_router.get("/search", response_model=JobList)
def search_jobs(q: Optional[str] = None, db: Session = Depends(get_db)):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail='Search query parameter "q" is required')
    return {"data": service.search_jobs(db, q.strip())}

@job_router.get("/stats", response_model=JobStats)
def job_stats(db: Session = Depends(get_db)):
    return service.job_stats(db)

# Create job through the stored routine
@job_router.post("/new-job", response_model=JobCreated, status_code=status.HTTP_201_CREATED)
def job_post_routine(payload: JobPayload, db: Session = Depends(get_db)):
    service.create_job_via_routine(db, payload)
    return {
        "message": "Job created successfully",
        "data": {"jobId": payload.job_id, "jobTitle": payload.job_title},
    }

# Get job by id
@job_router.get("/{job_id}", response_model=JobDetail)
def job_detail(job_id: str, db: Session = Depends(get_db)):
    row = service.get_job(db, job_id)
    if not row:
        raise HTTPException(status_code=404, detail="Job not found")
    return {"data": row}

@job_router.get("/{job_id}/employees", response_model=JobEmployees)
def job_employees(job_id: str, db: Session = Depends(get_db)):
    return {"data": service.job_employees(db, job_id)}

@job_router.get("/{job_id}/description", response_model=JobDescriptionOut)
def job_description(job_id: str, db: Session = Depends(get_db)):
    description = service.job_description(db, job_id)
    if description is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return {"data": {"job_id": job_id, "job_description": description}}

# Create job
@job_router.post("", response_model=JobCreated, status_code=status.HTTP_201_CREATED)
def job_post(payload: JobPayload, db: Session = Depends(get_db)):
    service.create_job(db, payload)
    return {
        "message": "Job created successfully",
        "data": {"jobId": payload.job_id, "jobTitle": payload.job_title},
    }

# Update job (full row)
@job_router.put("/{job_id}")
def job_put(job_id: str, payload: JobPayload, db: Session = Depends(get_db)):
    service.update_job(db, job_id, payload)
    return {"message": "Job updated successfully"}

# Update job through the stored routine
@job_router.put("/{job_id}/update-info")
def job_put_routine(job_id: str, payload: JobPayload, db: Session = Depends(get_db)):
    service.update_job_via_routine(db, job_id, payload)
    return {"message": "Job information updated successfully"}

# Delete job, refused while employees hold it
@job_router.delete("/{job_id}")
def job_delete(job_id: str, db: Session = Depends(get_db)):
    service.delete_job(db, job_id)
    return {"message": "Job deleted successfully"}
