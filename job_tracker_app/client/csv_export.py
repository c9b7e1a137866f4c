import csv
import io
import logging
import os
from datetime import date
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Company", "Role", "Category", "Date Applied", "Status", "Notes"]
CSV_FIELDS = ["company", "role", "category", "dateApplied", "status", "notes"]


def jobs_to_csv(jobs: Iterable[Dict[str, Any]]) -> str:
    """Serialize jobs: plain header row, then rows with every field double-quoted."""
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADERS) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for job in jobs:
        writer.writerow([job.get(field) or "" for field in CSV_FIELDS])
    return buffer.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"job-tracker-export-{today.isoformat()}.csv"


def write_csv(jobs: Iterable[Dict[str, Any]], directory: str = ".", today: Optional[date] = None) -> str:
    """Write the export file into ``directory`` and return its path."""
    path = os.path.join(directory, export_filename(today))
    content = jobs_to_csv(jobs)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    logger.info("Exported jobs to %s", path)
    return path
