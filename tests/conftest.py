"""Shared test fixtures for repo-heatmap tests."""

import os
import shutil
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pytest

from repo_heatmap.heatmap.models import FileStat

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def at(days: int) -> datetime:
    """Timestamp *days* after 2024-01-01 UTC."""
    return EPOCH + timedelta(days=days)


def make_stat(path: str, changes: int, day: int = 0) -> FileStat:
    return FileStat(
        path=path,
        change_count=changes,
        insertions=changes,
        deletions=0,
        last_modified=at(day),
        authors=["alice"],
    )


@pytest.fixture
def sample_files():
    """a/b.txt (5), d.txt (3), a/c.txt (1), ranked by change count."""
    return [make_stat("a/b.txt", 5), make_stat("d.txt", 3), make_stat("a/c.txt", 1)]


@pytest.fixture
def nested_files():
    """Files several directories deep, plus a root-level file."""
    return [
        make_stat("src/pkg/core/engine.py", 8),
        make_stat("src/pkg/core/util.py", 4),
        make_stat("src/pkg/api.py", 3),
        make_stat("README.md", 2),
        make_stat("src/main.py", 1),
        make_stat("docs/guide/intro/start.md", 1),
    ]


def _git(repo: Path, *args: str, env=None) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, env=env)


class ScratchRepo:
    """A throwaway git repository with dated, attributed commits."""

    def __init__(self, path: Path, object_format: Optional[str] = None):
        self.path = path
        path.mkdir()
        init = ["init", "-q"]
        if object_format:
            init.append(f"--object-format={object_format}")
        _git(path, *init)
        _git(path, "config", "user.email", "test@example.com")
        _git(path, "config", "user.name", "Test")
        _git(path, "config", "commit.gpgsign", "false")

    def commit(self, author: str, date: str, files: dict, removed: tuple = ()) -> None:
        for rel in removed:
            _git(self.path, "rm", "-q", rel)
        for rel, content in files.items():
            target = self.path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
            _git(self.path, "add", rel)
        env = dict(
            os.environ,
            GIT_AUTHOR_NAME=author,
            GIT_AUTHOR_EMAIL=f"{author}@example.com",
            GIT_AUTHOR_DATE=date,
            GIT_COMMITTER_DATE=date,
        )
        _git(self.path, "commit", "-q", "-m", f"change by {author}", env=env)


@pytest.fixture
def make_repo(tmp_path):
    """Factory for ScratchRepo instances under tmp_path; skips without git."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    def factory(name: str = "repo", object_format: Optional[str] = None) -> ScratchRepo:
        return ScratchRepo(tmp_path / name, object_format=object_format)

    return factory


@pytest.fixture
def git_repo(make_repo):
    """A throwaway repository with three commits by two authors.

    Commit 1 (alice, 2024-01-01): src/app.py +2, README.md +1
    Commit 2 (bob,   2024-02-01): src/app.py +1 -1, src/lib/util.py +3
    Commit 3 (alice, 2024-03-01): src/app.py +1
    """
    repo = make_repo()
    repo.commit("alice", "2024-01-01T12:00:00+00:00", {"src/app.py": "a\nb\n", "README.md": "hi\n"})
    repo.commit(
        "bob", "2024-02-01T12:00:00+00:00", {"src/app.py": "a\nc\n", "src/lib/util.py": "1\n2\n3\n"}
    )
    repo.commit("alice", "2024-03-01T12:00:00+00:00", {"src/app.py": "a\nc\nd\n"})
    return repo.path
