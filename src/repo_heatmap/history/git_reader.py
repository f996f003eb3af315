"""Read per-file change records from ``git log --numstat``."""

import re
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..exceptions import HistoryTimeoutError, HistoryUnavailableError
from ..logging_config import get_logger
from .models import ChangeRecord

logger = get_logger(__name__)

# Header: SHA-1 or SHA-256 hex hash | author name | strict ISO 8601 date.
# Author names may contain "|", so the date is always taken from the right.
_HEADER_RE = re.compile(r"^[0-9a-f]{40}(?:[0-9a-f]{24})?\|")

# Numstat: insertions <TAB> deletions <TAB> path. Binary files show "-".
_NUMSTAT_RE = re.compile(r"^(\d+)\s+(\d+)\s+(.+)$")

LOG_FORMAT = "--format=%H|%an|%aI"


class GitHistoryReader:
    """Run git log for one repository and parse it into ChangeRecords."""

    def __init__(
        self,
        repo_path: Union[str, Path],
        since: Optional[str] = None,
        until: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.repo_path = str(Path(repo_path).resolve())
        self.since = since
        self.until = until
        self.timeout = timeout

    def is_git_repo(self) -> bool:
        """Return True when ``repo_path`` is inside a git working tree."""
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            return result.returncode == 0
        except (FileNotFoundError, NotADirectoryError, subprocess.TimeoutExpired):
            return False

    def build_command(self) -> list[str]:
        cmd = [
            "git",
            "-C",
            self.repo_path,
            "-c",
            "core.quotepath=off",
            "log",
            LOG_FORMAT,
            "--numstat",
        ]
        if self.since:
            cmd.append(f"--since={self.since}")
        if self.until:
            cmd.append(f"--until={self.until}")
        return cmd

    def read(self) -> list[ChangeRecord]:
        """Invoke git log and return records in document order.

        Raises:
            HistoryUnavailableError: git is missing or exited with a failure status
            HistoryTimeoutError: git did not finish within ``timeout`` seconds
        """
        cmd = self.build_command()
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise HistoryUnavailableError(f"git executable not found: {e}")
        except subprocess.TimeoutExpired:
            raise HistoryTimeoutError(self.timeout or 0)

        # Negative return codes mean git was killed by a signal; keep its output.
        if result.returncode > 0:
            stderr = (result.stderr or "").strip()
            raise HistoryUnavailableError(stderr or "Unknown error", result.returncode)

        records = parse_numstat_log(result.stdout or "")
        logger.debug("Parsed %d change records", len(records))
        return records


def parse_numstat_log(raw: str) -> list[ChangeRecord]:
    """Parse ``git log --format=%H|%an|%aI --numstat`` output.

    Commit boundaries are detected by the header regex, so merge commits
    (which have no numstat lines) and consecutive headers need no special
    handling. Numstat lines with non-numeric counts are skipped.
    """
    records: list[ChangeRecord] = []
    in_commit = False
    author = ""
    timestamp: Optional[datetime] = None

    for line in raw.split("\n"):
        line = line.strip()
        if not line:
            continue

        if _HEADER_RE.match(line):
            _, rest = line.split("|", 1)
            if "|" not in rest:
                in_commit = False
                continue
            author, date = rest.rsplit("|", 1)
            try:
                timestamp = datetime.fromisoformat(date.strip())
            except ValueError:
                logger.debug("Skipping commit with unparsable date: %s", line)
                in_commit = False
                continue
            in_commit = True
            continue

        if not in_commit or timestamp is None:
            continue

        match = _NUMSTAT_RE.match(line)
        if match is None:
            logger.debug("Skipping numstat line: %s", line)
            continue

        records.append(
            ChangeRecord(
                path=match.group(3).strip(),
                insertions=int(match.group(1)),
                deletions=int(match.group(2)),
                author=author,
                timestamp=timestamp,
            )
        )

    return records
