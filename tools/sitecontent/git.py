from __future__ import annotations

import subprocess
from datetime import datetime, date
from pathlib import Path
from typing import Optional


def _run_git_dates(repo_dir: Path, args: list[str]) -> list[date]:
    try:
        proc = subprocess.run(
            ["git"] + args,
            cwd=repo_dir,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        # git not installed
        return []
    if proc.returncode != 0 or not proc.stdout.strip():
        return []
    dates: list[date] = []
    for line in proc.stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        # ISO 8601, e.g. 2025-03-01T10:23:45+00:00
        dt = datetime.fromisoformat(line)
        dates.append(dt.date())
    return dates


def git_last_commit_date(repo_dir: Path, path: Path) -> Optional[date]:
    """Author date of the last commit touching `path`, None if untracked."""
    rel = path.resolve().relative_to(repo_dir.resolve())
    dates = _run_git_dates(
        repo_dir,
        ["log", "--follow", "-1", "--format=%aI", "--", str(rel)],
    )
    return dates[0] if dates else None
