#!/usr/bin/env python3
"""
Start the Job Tracker API for local development.
"""
import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent


def build_environment(database_url: str) -> dict:
    """Development defaults; anything already exported wins."""
    env = os.environ.copy()
    env.setdefault("ENVIRONMENT", "development")
    env.setdefault("DATABASE_URL", database_url)
    env.setdefault("SESSION_SECRET", "dev-session-secret-change-me")
    env.setdefault("LOG_LEVEL", "INFO")
    return env


def main():
    parser = argparse.ArgumentParser(description="Run the Job Tracker API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--database-url", default="sqlite:///./job_tracker.db")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    command = [
        sys.executable, "-m", "uvicorn", "job_tracker_app.backend.main:app",
        "--host", args.host, "--port", str(args.port),
    ]
    if args.reload:
        command.append("--reload")

    logger.info("Starting backend server on http://%s:%d", args.host, args.port)
    try:
        result = subprocess.run(command, cwd=PROJECT_ROOT, env=build_environment(args.database_url))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return
    if result.returncode != 0:
        logger.error("Backend exited with code %d", result.returncode)
        sys.exit(result.returncode)


if __name__ == "__main__":
    main()
