import logging
from typing import List

from sqlalchemy.orm import Session

from .. import schemas
from ..errors import NotFound
from ..models.db import job as job_model
from ..models.db.database import utcnow

logger = logging.getLogger(__name__)

JOB_NOT_FOUND = "Job not found"


def list_jobs(db: Session, user_id: str) -> List[job_model.JobApplication]:
    return db.query(job_model.JobApplication).filter(
        job_model.JobApplication.user_id == user_id
    ).order_by(job_model.JobApplication.created_at.desc()).all()


def get_job(db: Session, job_id: str, user_id: str) -> job_model.JobApplication:
    """
    Fetch a job owned by ``user_id``. Jobs belonging to someone else are
    reported exactly like jobs that do not exist.
    """
    db_job = db.query(job_model.JobApplication).filter(
        job_model.JobApplication.id == job_id,
        job_model.JobApplication.user_id == user_id
    ).first()
    if db_job is None:
        raise NotFound(JOB_NOT_FOUND)
    return db_job


def create_job(db: Session, user_id: str, job: schemas.JobCreate) -> job_model.JobApplication:
    db_job = job_model.JobApplication(**job.model_dump(), user_id=user_id)
    db.add(db_job)
    db.commit()
    db.refresh(db_job)
    logger.info("User %s created job %s", user_id, db_job.id)
    return db_job


def update_job(db: Session, job_id: str, user_id: str, job_update: schemas.JobUpdate) -> job_model.JobApplication:
    db_job = get_job(db, job_id=job_id, user_id=user_id)
    update_data = job_update.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_job, key, value)
    db_job.updated_at = utcnow()
    db.commit()
    db.refresh(db_job)
    logger.info("User %s updated job %s (%s)", user_id, job_id, ", ".join(sorted(update_data)) or "no fields")
    return db_job


def delete_jobs(db: Session, job_ids: List[str], user_id: str) -> int:
    """Delete the listed jobs that ``user_id`` owns; returns how many went."""
    if not job_ids:
        return 0
    deleted = db.query(job_model.JobApplication).filter(
        job_model.JobApplication.id.in_(job_ids),
        job_model.JobApplication.user_id == user_id
    ).delete(synchronize_session=False)
    db.commit()
    logger.info("User %s deleted %d of %d requested jobs", user_id, deleted, len(job_ids))
    return deleted
