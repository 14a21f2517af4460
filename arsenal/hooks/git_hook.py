"""
Pre-push hook installation.

`arsenal link` writes .git/hooks/pre-push so every push runs `arsenal sync`
first; `arsenal unlink` removes it again.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from loguru import logger

from arsenal.core.credential_store import CredentialStore
from arsenal.core.errors import NotAGitRepoError

HOOK_SCRIPT = """#!/bin/sh
echo "🔁 Running arsenal sync before git push..."
arsenal sync
"""


def _git(workdir: Path, *args: str) -> subprocess.CompletedProcess[str] | None:
    """Run a git command; None when git is not installed."""
    try:
        return subprocess.run(
            ["git", *args],
            cwd=workdir,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        logger.warning("git executable not found on PATH")
        return None


def is_git_repo(workdir: Path) -> bool:
    result = _git(workdir, "rev-parse", "--is-inside-work-tree")
    return result is not None and result.returncode == 0 and result.stdout.strip() == "true"


def detect_remote_url(workdir: Path) -> str | None:
    """URL of remote.origin, if configured."""
    result = _git(workdir, "config", "--get", "remote.origin.url")
    if result is None or result.returncode != 0:
        return None
    return result.stdout.strip() or None


class HookInstaller:
    """Installs and removes the arsenal pre-push hook for one working tree."""

    def __init__(self, workdir: Path):
        self.workdir = workdir
        self.hook_path = workdir / ".git" / "hooks" / "pre-push"
        self._credentials = CredentialStore(workdir)

    @property
    def installed(self) -> bool:
        return self.hook_path.is_file()

    def link(self, repo_url: str) -> Path:
        """
        Record the GitHub repo and install the hook, replacing any existing one.

        Raises:
            NotAGitRepoError: If workdir is not inside a git working tree
            ConfigMissingError: If the project was never initialized
        """
        if not is_git_repo(self.workdir):
            raise NotAGitRepoError(self.workdir)

        # config is saved only once the hook is in place
        updated = self._credentials.with_field("githubRepo", repo_url)

        self.hook_path.parent.mkdir(parents=True, exist_ok=True)
        self.hook_path.write_text(HOOK_SCRIPT, encoding="utf-8")
        self.hook_path.chmod(0o755)
        logger.info(f"Installed pre-push hook at {self.hook_path}")

        self._credentials.save(updated)
        return self.hook_path

    def unlink(self) -> bool:
        """Remove the hook. Returns False when there was nothing to remove."""
        if not self.installed:
            return False
        self.hook_path.unlink()
        logger.info(f"Removed pre-push hook at {self.hook_path}")
        return True
