"""Map commits onto the particle population."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .descriptor import Commit
from .prng import clamp, map_range, string_hash, utf16_length
from .signature import Signature

__all__ = ["Particle", "TimeWindow", "PARTICLE_CAP", "MAX_POPULATION", "time_window", "map_commit", "map_commits"]

PARTICLE_CAP = 150
MAX_POPULATION = 200
DAY_MS = 86400000.0
_FALLBACK_ANCHOR_MS = 1.5e12


@dataclass
class Particle:
    """Point entity standing for one commit (or a background ghost)."""

    index: int
    x: float
    y: float
    vx: float
    vy: float
    size: float
    hue: float
    alpha: float
    phase: float
    author_hash: int = 0
    commit_hash: int = 0
    commit: Optional[Commit] = None
    is_background: bool = False
    origin_x: float = 0.0
    origin_y: float = 0.0
    prev_x: float = 0.0
    prev_y: float = 0.0

    def __post_init__(self) -> None:
        self.origin_x = self.prev_x = self.x
        self.origin_y = self.prev_y = self.y

    def move_to(self, x: float, y: float) -> None:
        self.prev_x, self.prev_y = self.x, self.y
        self.x, self.y = x, y


@dataclass(frozen=True)
class TimeWindow:
    min_time: float
    max_time: float
    times: Sequence[float]


def time_window(commits: Sequence[Commit], repo_hash: int) -> TimeWindow:
    """Resolve one usable timestamp per commit and the window spanning them.

    Invalid timestamps are replaced by evenly spaced values inside the window
    of the valid ones.  Without any valid timestamp the window is a year
    ending at an anchor derived from ``repo_hash``.
    """

    raw = [commit.epoch_ms() for commit in commits]
    valid = [value for value in raw if value is not None]
    if valid:
        min_time = min(valid)
        max_time = max(valid)
    else:
        max_time = _FALLBACK_ANCHOR_MS + (repo_hash % 1000) * DAY_MS
        min_time = max_time - 365 * DAY_MS
    if min_time == max_time:
        min_time -= DAY_MS
        max_time += DAY_MS

    count = len(commits)
    times: List[float] = []
    for idx, value in enumerate(raw):
        if value is None:
            frac = idx / (count - 1) if count > 1 else 0.5
            value = min_time + frac * (max_time - min_time)
        times.append(value)
    return TimeWindow(min_time, max_time, tuple(times))


def map_commit(
    commit: Commit,
    index: int,
    commit_time: float,
    window: TimeWindow,
    width: float,
    height: float,
) -> Particle:
    author_key = commit.author_name or commit.author_email or "Unknown"
    author_hash = string_hash(author_key)
    commit_hash = string_hash(commit.id or commit.message or author_key)
    total = max(0, commit.change_total)

    time_norm = map_range(commit_time, window.min_time, window.max_time, 0.1, 0.9)
    x_jitter = (utf16_length(commit.message) % 20 - 10) * 2
    x = time_norm * width + x_jitter

    author_band = (author_hash % 5) + 1
    y = author_band * (height / 6) + (commit_hash % 100 - 50)

    volatility = min(total / 100, 5)
    return Particle(
        index=index,
        x=x,
        y=y,
        vx=((commit_hash % 100) / 100 - 0.5) * volatility * 0.2,
        vy=((author_hash % 100) / 100 - 0.5) * volatility * 0.2,
        size=clamp(math.log(total + 1) * 3, 2, 15),
        hue=float(author_hash % 360),
        alpha=0.5 + (commit_hash % 50) / 100,
        phase=(commit_time % 1000) / 1000 * math.pi * 2,
        author_hash=author_hash,
        commit_hash=commit_hash,
        commit=commit,
    )


def _ghost_particles(signature: Signature, start: int, width: float, height: float) -> List[Particle]:
    count = min(int(signature.style_profile.param("ghosts", 0)), MAX_POPULATION - start)
    ghosts: List[Particle] = []
    for i in range(max(0, count)):
        seed = signature.seed + i
        ghosts.append(
            Particle(
                index=start + i,
                x=(seed % 1000) / 1000 * width,
                y=((seed * 2) % 1000) / 1000 * height,
                vx=0.0,
                vy=0.0,
                size=float(1 + seed % 3),
                hue=float(signature.secondary_hue),
                alpha=0.2,
                phase=0.0,
                is_background=True,
            )
        )
    return ghosts


def map_commits(
    commits: Sequence[Commit],
    signature: Signature,
    width: float,
    height: float,
    cap: int = PARTICLE_CAP,
) -> List[Particle]:
    """Build the initial population for a run.

    ``commits`` is ordered oldest first and cut at ``cap``.  Particles with a
    non-finite coordinate are dropped.  Background particles never push the
    population past ``MAX_POPULATION``.
    """

    active = list(commits[:cap])
    particles: List[Particle] = []
    if active:
        window = time_window(active, signature.seed)
        for idx, commit in enumerate(active):
            particle = map_commit(commit, len(particles), window.times[idx], window, width, height)
            if not (math.isfinite(particle.x) and math.isfinite(particle.y)):
                continue
            particles.append(particle)
    particles.extend(_ghost_particles(signature, len(particles), width, height))
    return particles
