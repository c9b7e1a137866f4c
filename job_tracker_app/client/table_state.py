"""
In-memory view of the user's job applications.

Mutations go to the server first; local state only changes once the server
has answered. Sorting, filtering, paging and selection never touch the
network.
"""
import logging
import math
from collections import Counter
from typing import Any, Dict, List, Optional, Set

from .api_client import JobTrackerClient
from .csv_export import write_csv

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = ("company", "role", "category", "dateApplied", "status", "createdAt")
SEARCH_FIELDS = ("company", "role", "notes")
INTERVIEW_STATUSES = ("Interview Scheduled", "Technical Interview")
CATEGORIES = ("Big Tech", "Startup", "Mid-Tier", "Other")
DEFAULT_PAGE_SIZE = 10


class JobTableState:
    def __init__(self, client: JobTrackerClient, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.jobs: List[Dict[str, Any]] = []
        self.sort_column: Optional[str] = None
        self.sort_descending = False
        self.search = ""
        self.status_filter: Optional[str] = None
        self.category_filter: Optional[str] = None
        self.page_size = page_size
        self.page = 0
        self.selected: Set[str] = set()

    # Server-backed operations
    def load(self) -> List[Dict[str, Any]]:
        self.jobs = self.client.get_jobs()
        self.selected &= {job["id"] for job in self.jobs}
        return self.jobs

    def add_job(self, job: Dict[str, Any]) -> Dict[str, Any]:
        created = self.client.add_job(job)
        self.jobs.insert(0, created)
        return created

    def update_job(self, job_id: str, field: str, value: Any) -> Dict[str, Any]:
        updated = self.client.update_job(job_id, {field: value})
        self.jobs = [updated if job["id"] == job_id else job for job in self.jobs]
        return updated

    def delete_jobs(self, ids: List[str]) -> int:
        ids = list(ids)
        if not ids:
            return 0
        deleted_count = self.client.delete_jobs(ids)
        removed = set(ids)
        self.jobs = [job for job in self.jobs if job["id"] not in removed]
        self.selected -= removed
        self._clamp_page()
        return deleted_count

    def delete_selected(self) -> int:
        return self.delete_jobs(sorted(self.selected))

    # Local view operations
    def sort_by(self, column: str, descending: Optional[bool] = None) -> None:
        """Sort on ``column``; with no direction given, repeated calls toggle it."""
        if column not in SORTABLE_COLUMNS:
            raise ValueError(f"Cannot sort by {column}")
        if descending is None:
            descending = column == self.sort_column and not self.sort_descending
        self.sort_column = column
        self.sort_descending = descending

    def clear_sort(self) -> None:
        self.sort_column = None
        self.sort_descending = False

    def set_filter(self, search: Optional[str] = None, status: Optional[str] = None,
                   category: Optional[str] = None) -> None:
        self.search = (search or "").strip().lower()
        self.status_filter = status
        self.category_filter = category
        self.page = 0

    def _matches(self, job: Dict[str, Any]) -> bool:
        if self.status_filter and job.get("status") != self.status_filter:
            return False
        if self.category_filter and job.get("category") != self.category_filter:
            return False
        if self.search:
            return any(self.search in str(job.get(field) or "").lower() for field in SEARCH_FIELDS)
        return True

    def filtered_rows(self) -> List[Dict[str, Any]]:
        rows = [job for job in self.jobs if self._matches(job)]
        if self.sort_column:
            column = self.sort_column
            rows.sort(key=lambda job: str(job.get(column) or "").lower(), reverse=self.sort_descending)
        return rows

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self.filtered_rows()) / self.page_size))

    def _clamp_page(self) -> None:
        self.page = min(self.page, self.page_count - 1)

    def set_page(self, page: int) -> None:
        self.page = max(0, min(page, self.page_count - 1))

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self._clamp_page()

    def visible_rows(self) -> List[Dict[str, Any]]:
        start = self.page * self.page_size
        return self.filtered_rows()[start:start + self.page_size]

    def toggle_selected(self, job_id: str, selected: Optional[bool] = None) -> None:
        if selected is None:
            selected = job_id not in self.selected
        if selected:
            self.selected.add(job_id)
        else:
            self.selected.discard(job_id)

    def select_page(self, selected: bool = True) -> None:
        for job in self.visible_rows():
            self.toggle_selected(job["id"], selected)

    def summary(self) -> Dict[str, Any]:
        statuses = Counter(job.get("status") for job in self.jobs)
        categories = Counter(job.get("category") for job in self.jobs)
        return {
            "total": len(self.jobs),
            "interviews": sum(statuses[s] for s in INTERVIEW_STATUSES),
            "offers": statuses["Offer Received"],
            "rejections": statuses["Rejected"],
            "categories": {c: categories[c] for c in CATEGORIES},
        }

    def export_csv(self, directory: str = ".") -> str:
        """Export everything loaded, ignoring the current filter."""
        return write_csv(self.jobs, directory)
