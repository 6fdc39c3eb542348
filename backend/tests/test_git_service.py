import shutil
import subprocess

import pytest

from runninglog.core.errors import GitError
from runninglog.services.git_service import GitService

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo, *args):
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture()
def repo(tmp_path):
    path = tmp_path / "repo"
    path.mkdir()
    _git(path, "init", "-q")
    _git(path, "config", "user.email", "runner@example.com")
    _git(path, "config", "user.name", "Runner")
    return path


def test_is_git_repository(repo, tmp_path):
    assert GitService(str(repo)).is_git_repository()
    assert not GitService(str(tmp_path)).is_git_repository()


def test_status_lists_untracked(repo):
    (repo / "a.txt").write_text("x")
    assert "a.txt" in GitService(str(repo)).status()


def test_sync_commits_copied_files_then_is_idempotent(repo, tmp_path):
    src = tmp_path / "heatmap_2025.png"
    src.write_bytes(b"png")
    git = GitService(str(repo))

    assert git.sync([str(src)], "Update running log") is True
    assert (repo / "heatmap_2025.png").read_bytes() == b"png"
    assert git.status() == ""
    log = subprocess.run(
        ["git", "log", "--oneline"], cwd=repo, capture_output=True, text=True, check=True
    ).stdout
    assert "Update running log" in log

    assert git.sync([str(src)], "Update running log") is False

    src.write_bytes(b"png2")
    assert git.sync([str(src)], "Second update") is True


def test_sync_outside_repository(tmp_path):
    with pytest.raises(GitError):
        GitService(str(tmp_path)).sync([], "msg")


def test_unpushed_commits_without_upstream_raises(repo):
    git = GitService(str(repo))
    assert git.has_upstream() is False
    with pytest.raises(GitError) as exc:
        git.unpushed_commits()
    assert exc.value.returncode != 0


def test_sync_ignores_unrelated_untracked_files(repo, tmp_path):
    src = tmp_path / "running_log.csv"
    src.write_text("date\n")
    git = GitService(str(repo))
    assert git.sync([str(src)], "Update running log") is True

    (repo / "scratch.txt").write_text("not ours")
    assert "scratch.txt" in git.status()
    assert git.tracked_changes() == ""
    assert git.sync([str(src)], "Update running log") is False
