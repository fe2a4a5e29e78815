"""Repository descriptor consumed by the engine.

The engine only needs the typed shape defined here.  How the data is fetched
is up to the caller; :func:`descriptor_from_mapping` accepts either the flat
shape below or a payload laid out like the GitHub REST API responses
(``info``/``commits``/``languages``/``contributors``) and normalises both.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple, Union

__all__ = [
    "ChangeStats",
    "Commit",
    "Contributor",
    "RepositoryDescriptor",
    "Timestamp",
    "to_epoch_ms",
    "descriptor_from_mapping",
    "parse_repo_slug",
]

Timestamp = Union[datetime, str, int, float, None]

DEFAULT_CHANGE_TOTAL = 10


def to_epoch_ms(value: Timestamp) -> Optional[float]:
    """Return ``value`` as milliseconds since the epoch, ``None`` when unusable."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        stamp = value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
        return stamp.timestamp() * 1000.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    text = str(value).strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return to_epoch_ms(parsed)


def _coerce_int(value: object, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        number = float(str(value))
    except (TypeError, ValueError):
        return default
    return int(number) if math.isfinite(number) else default


@dataclass(frozen=True)
class ChangeStats:
    total: int = DEFAULT_CHANGE_TOTAL
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class Commit:
    """A single commit; only ``id``/author/time/message/stats are read."""

    id: str = ""
    author_name: str = ""
    author_email: str = ""
    timestamp: Timestamp = None
    message: str = ""
    stats: Optional[ChangeStats] = None

    def epoch_ms(self) -> Optional[float]:
        return to_epoch_ms(self.timestamp)

    @property
    def change_total(self) -> int:
        return self.stats.total if self.stats is not None else DEFAULT_CHANGE_TOTAL


@dataclass(frozen=True)
class Contributor:
    name: str = ""
    contributions: int = 0


@dataclass(frozen=True)
class RepositoryDescriptor:
    """Immutable input of a visualization run.

    ``languages`` keeps the insertion order supplied by the caller: the first
    key is the dominant language.  ``commits`` is ordered oldest first.
    """

    name: str
    created_at: Timestamp = None
    languages: Dict[str, int] = field(default_factory=dict)
    contributors: Tuple[Contributor, ...] = ()
    commits: Tuple[Commit, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "contributors", tuple(self.contributors))
        object.__setattr__(self, "commits", tuple(self.commits))
        object.__setattr__(self, "languages", dict(self.languages))

    @property
    def language_count(self) -> int:
        return len(self.languages)

    @property
    def contributor_count(self) -> int:
        return len(self.contributors)

    @property
    def commit_count(self) -> int:
        return len(self.commits)


# ---------------------------------------------------------------------------
# Mapping parser


def _get(mapping: object, *path: str) -> object:
    current = mapping
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _sanitize_stats(raw: object) -> Optional[ChangeStats]:
    if not isinstance(raw, Mapping):
        return None
    total = _coerce_int(raw.get("total"), DEFAULT_CHANGE_TOTAL)
    return ChangeStats(
        total=total if total >= 0 else DEFAULT_CHANGE_TOTAL,
        additions=_coerce_int(raw.get("additions")),
        deletions=_coerce_int(raw.get("deletions")),
    )


def _sanitize_commit(entry: object) -> Optional[Commit]:
    if isinstance(entry, Commit):
        return entry
    if not isinstance(entry, Mapping):
        return None
    nested = entry.get("commit")
    if isinstance(nested, Mapping):
        author = _get(nested, "author")
        return Commit(
            id=_text(entry.get("sha")),
            author_name=_text(_get(author, "name")),
            author_email=_text(_get(author, "email")),
            timestamp=_get(author, "date"),  # type: ignore[arg-type]
            message=_text(nested.get("message")),
            stats=_sanitize_stats(entry.get("stats")),
        )
    return Commit(
        id=_text(entry.get("id") or entry.get("sha")),
        author_name=_text(entry.get("author_name") or entry.get("authorName")),
        author_email=_text(entry.get("author_email") or entry.get("authorEmail")),
        timestamp=entry.get("timestamp"),  # type: ignore[arg-type]
        message=_text(entry.get("message")),
        stats=_sanitize_stats(entry.get("stats") or entry.get("changeStats")),
    )


def _sanitize_contributor(entry: object) -> Contributor:
    if isinstance(entry, Contributor):
        return entry
    if isinstance(entry, Mapping):
        name = _text(entry.get("name") or entry.get("login"))
        count = _coerce_int(entry.get("contributions") or entry.get("contributionCount"))
        return Contributor(name=name, contributions=count)
    return Contributor()


def _sanitize_languages(raw: object) -> Dict[str, int]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(key): _coerce_int(value) for key, value in raw.items()}


def descriptor_from_mapping(payload: Mapping[str, object]) -> RepositoryDescriptor:
    """Build a descriptor from a loosely typed payload.

    Unknown or malformed entries are skipped; missing fields take defaults.
    """

    name = _text(_get(payload, "info", "full_name")) or _text(payload.get("name"))
    created_at = _get(payload, "info", "created_at") or payload.get("created_at") or payload.get("createdAt")
    commits_raw = payload.get("commits")
    commits: List[Commit] = []
    if isinstance(commits_raw, Sequence) and not isinstance(commits_raw, (str, bytes)):
        for entry in commits_raw:
            commit = _sanitize_commit(entry)
            if commit is not None:
                commits.append(commit)
    contributors_raw = payload.get("contributors")
    contributors: List[Contributor] = []
    if isinstance(contributors_raw, Sequence) and not isinstance(contributors_raw, (str, bytes)):
        contributors = [_sanitize_contributor(entry) for entry in contributors_raw]
    return RepositoryDescriptor(
        name=name,
        created_at=created_at,  # type: ignore[arg-type]
        languages=_sanitize_languages(payload.get("languages")),
        contributors=tuple(contributors),
        commits=tuple(commits),
    )


def parse_repo_slug(url: str) -> Tuple[str, str]:
    """Split ``https://github.com/owner/repo`` (or ``owner/repo``) into its parts."""

    clean = (url or "").strip()
    for prefix in ("https://", "http://"):
        if clean.startswith(prefix):
            clean = clean[len(prefix):]
    if clean.startswith("github.com/"):
        clean = clean[len("github.com/"):]
    parts = [part for part in clean.split("/") if part]
    if len(parts) < 2:
        raise ValueError(f"Invalid repository URL: {url!r}")
    repo = parts[1][:-4] if parts[1].endswith(".git") else parts[1]
    return parts[0], repo
