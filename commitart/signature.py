"""Derive the per-repository signature that drives every visual choice."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .descriptor import RepositoryDescriptor
from .profiles import PROFILES, StyleProfile, is_forbidden
from .prng import string_hash

__all__ = ["Signature", "derive_signature", "style_index", "select_profile_index"]

FALLBACK_LANGUAGE = "JavaScript"


@dataclass(frozen=True)
class Signature:
    """Immutable record computed once per visualization run."""

    seed: int
    primary_hue: int
    secondary_hue: int
    tertiary_hue: int
    complexity: float
    energy: float
    style_id: str
    style_profile: StyleProfile
    animation_speed: float
    repo_name: str = ""
    language_count: int = 0
    contributor_count: int = 0
    commit_count: int = 0

    @property
    def hash(self) -> int:
        return self.seed

    @property
    def style(self) -> str:
        return self.style_profile.style


def style_index(repo_hash: int, complexity: float, energy: float, commit_count: int, profile_count: int) -> int:
    total = repo_hash + int(math.floor(complexity * 13)) + int(math.floor(energy * 7)) + commit_count
    return abs(total) % profile_count


def select_profile_index(
    repo_name: str,
    repo_hash: int,
    index: int,
    profiles: Sequence[StyleProfile] = PROFILES,
) -> int:
    """Walk the catalog away from profiles excluded for ``repo_name``.

    The walk uses a stride of ``7 + repo_hash % 5`` and stops after as many
    steps as there are profiles; when the stride cycles through forbidden
    entries only, the last visited entry is kept.
    """

    count = len(profiles)
    if not is_forbidden(repo_name, profiles[index]):
        return index
    stride = 7 + repo_hash % 5
    for _ in range(count):
        index = (index + stride) % count
        if not is_forbidden(repo_name, profiles[index]):
            break
    return index


def derive_signature(descriptor: RepositoryDescriptor) -> Signature:
    repo_name = descriptor.name or ""
    repo_hash = string_hash(repo_name)

    dominant = next(iter(descriptor.languages), None) or FALLBACK_LANGUAGE
    base_hue = string_hash(dominant) % 360

    commit_count = descriptor.commit_count
    complexity = min(descriptor.language_count + descriptor.contributor_count / 5, 20)
    energy = min(commit_count / 20, 100)

    index = style_index(repo_hash, complexity, energy, commit_count, len(PROFILES))
    index = select_profile_index(repo_name, repo_hash, index)
    profile = PROFILES[index]

    primary = (base_hue + profile.hue_shift) % 360
    secondary = (primary + (profile.secondary_offset or 180)) % 360
    tertiary = (primary + (profile.tertiary_offset or 90)) % 360
    speed = (0.009 + (repo_hash % 12) / 1200) * (profile.speed_scale or 1)

    return Signature(
        seed=repo_hash,
        primary_hue=primary,
        secondary_hue=secondary,
        tertiary_hue=tertiary,
        complexity=complexity,
        energy=energy,
        style_id=profile.key,
        style_profile=profile,
        animation_speed=speed,
        repo_name=repo_name,
        language_count=descriptor.language_count,
        contributor_count=descriptor.contributor_count,
        commit_count=commit_count,
    )
