"""Shared fixtures: a Qt application and small throwaway repositories."""

import os
from pathlib import Path

import pygit2
import pytest

# Qt widgets in tests never need a real display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


def _commit(
    repo: pygit2.Repository,
    ref: str | None,
    message: str,
    parents: list[pygit2.Oid],
    when: int,
) -> pygit2.Oid:
    sig = pygit2.Signature("Test Author", "author@example.com", when, 0)
    tree = repo.TreeBuilder().write()
    return repo.create_commit(ref, sig, sig, message, tree, parents)


@pytest.fixture
def history_repo(tmp_path: Path) -> dict[str, str]:
    """
    Build:

        merge    (main, HEAD)
        |    \\
        main2  feature1  (feature)
        |    /
        root     (tag v1)

    Returns the repo path and commit oids by name.
    """
    path = tmp_path / "repo"
    repo = pygit2.init_repository(str(path))

    root = _commit(repo, "refs/heads/main", "Initial commit", [], 1_700_000_000)
    main2 = _commit(repo, "refs/heads/main", "Main work\n\nLonger body", [root], 1_700_000_100)
    feature1 = _commit(repo, "refs/heads/feature", "Feature | work", [root], 1_700_000_200)
    merge = _commit(repo, "refs/heads/main", "Merge feature", [main2, feature1], 1_700_000_300)
    repo.set_head("refs/heads/main")
    repo.create_reference("refs/tags/v1", root)

    return {
        "path": str(path),
        "root": str(root),
        "main2": str(main2),
        "feature1": str(feature1),
        "merge": str(merge),
    }


@pytest.fixture
def tagged_repo(tmp_path: Path) -> dict[str, str]:
    """
    Build:

        release  (tag release only)
        |
        root     (main, HEAD)

    Returns the repo path and commit oids by name.
    """
    path = tmp_path / "tagged"
    repo = pygit2.init_repository(str(path))

    root = _commit(repo, "refs/heads/main", "Initial commit", [], 1_700_000_000)
    release = _commit(repo, None, "Release build", [root], 1_700_000_100)
    repo.set_head("refs/heads/main")
    repo.create_reference("refs/tags/release", release)

    return {"path": str(path), "root": str(root), "release": str(release)}
