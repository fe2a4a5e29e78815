"""Synthetic descriptor used when repository metadata cannot be fetched."""

from __future__ import annotations

import math
from typing import List

from .descriptor import ChangeStats, Commit, Contributor, RepositoryDescriptor, parse_repo_slug
from .prng import create_prng, string_hash

__all__ = ["synthetic_descriptor"]

_YEAR_MS = 31536000000
_DAY_MS = 86400000
_ANCHOR_MS = 1_700_000_000_000


def synthetic_descriptor(slug_or_url: str) -> RepositoryDescriptor:
    """Return a deterministic stand-in descriptor for ``owner/repo``.

    Every value is drawn from a generator seeded by the repository name, so
    the same slug always yields the same descriptor (and artwork).
    """

    owner, repo = parse_repo_slug(slug_or_url)
    name = f"{owner}/{repo}"
    seed = string_hash(name)
    random = create_prng(seed)
    anchor = _ANCHOR_MS + (seed % 365) * _DAY_MS

    count = 50 + int(math.floor(random() * 100))
    commits: List[Commit] = []
    for i in range(count):
        email = f"dev{int(math.floor(random() * 5))}@test.com"
        when = anchor - int(math.floor(random() * _YEAR_MS))
        stats = ChangeStats(
            total=int(math.floor(random() * 100)) + 10,
            additions=int(math.floor(random() * 60)),
            deletions=int(math.floor(random() * 40)),
        )
        commits.append(Commit(id=f"mock-{i}", author_email=email, timestamp=float(when), stats=stats))
    commits.sort(key=lambda commit: commit.timestamp)  # type: ignore[arg-type,return-value]

    return RepositoryDescriptor(
        name=name,
        created_at=float(anchor - _YEAR_MS),
        languages={"JavaScript": 10000, "CSS": 5000},
        contributors=tuple(Contributor(name=f"dev{i}") for i in range(5)),
        commits=tuple(commits),
    )
