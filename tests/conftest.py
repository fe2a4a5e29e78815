from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PyQt5 import QtWidgets  # noqa: E402

from commitart.descriptor import Commit, Contributor, RepositoryDescriptor  # noqa: E402

DAY_MS = 86400000.0


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(["commitart-tests"])
    yield app


def make_descriptor(name: str = "acme/widgets", commit_count: int = 50) -> RepositoryDescriptor:
    authors = ("alice", "bob", "carol")
    commits = [
        Commit(
            id=f"c{i:03d}",
            author_name=authors[i % 3],
            timestamp=1.6e12 + i * 365 * DAY_MS / max(1, commit_count - 1),
            message=f"change number {i}",
        )
        for i in range(commit_count)
    ]
    return RepositoryDescriptor(
        name=name,
        languages={"JavaScript": 8000, "CSS": 2000},
        contributors=[Contributor(name=author, contributions=10) for author in authors],
        commits=commits,
    )


@pytest.fixture
def acme() -> RepositoryDescriptor:
    return make_descriptor()


@pytest.fixture
def empty_repo() -> RepositoryDescriptor:
    return RepositoryDescriptor(name="acme/empty")
