from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import schemas
from ..models.db.database import get_db
from ..services import job_repository
from ..services.session_store import SessionContext
from .auth import get_current_session

router = APIRouter()


@router.get("", response_model=List[schemas.Job])
def read_jobs(
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
):
    """
    Retrieve all job applications for the current user, newest first.
    """
    return job_repository.list_jobs(db, user_id=context.user_id)


@router.get("/{job_id}", response_model=schemas.Job)
def read_job(
    job_id: str,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
):
    return job_repository.get_job(db, job_id=job_id, user_id=context.user_id)


@router.post("", response_model=schemas.Job, status_code=status.HTTP_201_CREATED)
def create_job(
    job: schemas.JobCreate,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
):
    """
    Create a new job application entry for the current user.
    """
    return job_repository.create_job(db, user_id=context.user_id, job=job)


@router.patch("/{job_id}", response_model=schemas.Job)
def update_job(
    job_id: str,
    job: schemas.JobUpdate,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
):
    """
    Update only the fields present in the request body.
    """
    return job_repository.update_job(db, job_id=job_id, user_id=context.user_id, job_update=job)


@router.delete("", response_model=schemas.JobDeleteResult)
def delete_jobs(
    payload: schemas.JobDeleteRequest,
    db: Session = Depends(get_db),
    context: SessionContext = Depends(get_current_session)
):
    deleted_count = job_repository.delete_jobs(db, job_ids=payload.ids, user_id=context.user_id)
    return {"deleted_count": deleted_count}
