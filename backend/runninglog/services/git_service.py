"""Thin wrapper over the ``git`` executable for publishing generated files."""
import logging
import os
import shutil
import subprocess
from typing import Iterable

from runninglog.core.errors import GitError

logger = logging.getLogger(__name__)


class GitService:
    def __init__(self, repo_dir: str):
        self.repo_dir = repo_dir

    def _run(self, *args: str) -> str:
        cmd = ["git", *args]
        logger.debug("Running %s in %s", " ".join(cmd), self.repo_dir)
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_dir,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitError(cmd, 127, str(e)) from e

        for line in (result.stdout + result.stderr).splitlines():
            logger.debug(line)
        if result.returncode != 0:
            raise GitError(cmd, result.returncode, result.stderr)
        return result.stdout

    def is_git_repository(self) -> bool:
        return os.path.isdir(os.path.join(self.repo_dir, ".git"))

    def status(self) -> str:
        return self._run("status", "--porcelain").strip()

    def tracked_changes(self) -> str:
        """Staged or modified tracked files only; untracked files are ignored."""
        return self._run("status", "--porcelain", "--untracked-files=no").strip()

    def pull(self) -> None:
        self._run("pull")

    def add(self, paths: Iterable[str]) -> None:
        self._run("add", "--", *paths)

    def commit(self, message: str) -> None:
        self._run("commit", "-a", "-m", message)

    def push(self) -> None:
        self._run("push")

    def has_upstream(self) -> bool:
        try:
            self._run("rev-parse", "--abbrev-ref", "@{u}")
        except GitError:
            return False
        return True

    def unpushed_commits(self) -> str:
        return self._run("log", "@{u}..HEAD", "--oneline").strip()

    def sync(self, files: Iterable[str], message: str) -> bool:
        """Copy files into the repo root, commit and push them.

        Pull and push only happen when the branch tracks a remote. Returns
        False when there was nothing to commit.
        """
        if not self.is_git_repository():
            raise GitError(["git"], 128, f"{self.repo_dir} is not a git repository")

        tracking = self.has_upstream()
        if tracking:
            self.pull()

        names = []
        for src in files:
            name = os.path.basename(src)
            dest = os.path.join(self.repo_dir, name)
            if os.path.abspath(src) != os.path.abspath(dest):
                shutil.copy2(src, dest)
            names.append(name)
        if names:
            self.add(names)

        if not self.tracked_changes():
            logger.info("Nothing to commit in %s", self.repo_dir)
            return False

        self.commit(message)
        if tracking:
            self.push()
        logger.info("Committed %d file(s) to %s", len(names), self.repo_dir)
        return True
