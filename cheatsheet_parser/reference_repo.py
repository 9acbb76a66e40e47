"""Fetch the upstream reference cheatsheet repository with ``git``.

The ``github`` CLI command clones the repository shallowly into a scratch
directory and parses the markdown posts found under ``source/_posts``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from ._constants import REFERENCE_POSTS_DIR, REFERENCE_REPO_URL

logger = logging.getLogger(__name__)


class ReferenceRepoError(RuntimeError):
    """Raised when a cloned reference repository has no posts directory."""


def clone_reference_repo(
    dest: Path,
    *,
    repo_url: str = REFERENCE_REPO_URL,
    git_exe: str | None = None,
) -> Path:
    """Shallow-clone ``repo_url`` into ``dest`` and return its posts directory.

    Parameters
    ----------
    dest : Path
        Clone target; an existing directory at this path is removed first.
    repo_url : str, optional
        Repository to clone.
    git_exe : str or None, optional
        Path to the ``git`` executable; resolved from ``PATH`` when omitted.

    Returns
    -------
    Path
        The ``source/_posts`` directory inside the clone.

    Raises
    ------
    FileNotFoundError
        If ``git`` cannot be located.
    subprocess.CalledProcessError
        If the clone fails.
    ReferenceRepoError
        If the clone does not contain a posts directory.
    """
    cmd = git_exe or shutil.which("git")
    if not cmd:
        msg = "git is required to clone the reference repository"
        raise FileNotFoundError(msg)

    if dest.exists():
        logger.info("Removing existing directory %s", dest)
        shutil.rmtree(dest)

    logger.info("Cloning %s into %s", repo_url, dest)
    subprocess.run(  # noqa: S603
        [cmd, "clone", "--depth", "1", repo_url, str(dest)],
        check=True,
        text=True,
        capture_output=True,
    )

    posts_dir = dest / REFERENCE_POSTS_DIR
    if not posts_dir.is_dir():
        msg = f"Posts directory not found: {posts_dir}"
        raise ReferenceRepoError(msg)
    return posts_dir


def remove_clone(dest: Path) -> None:
    """Delete a cloned repository directory if it exists."""
    if dest.exists():
        shutil.rmtree(dest)


__all__ = ["ReferenceRepoError", "clone_reference_repo", "remove_clone"]
