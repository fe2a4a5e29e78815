from __future__ import annotations

import dataclasses
import math

import pytest
from conftest import DAY_MS, make_descriptor

from commitart.descriptor import ChangeStats, Commit
from commitart.particles import MAX_POPULATION, PARTICLE_CAP, map_commit, map_commits, time_window
from commitart.profiles import PROFILES, profile_by_key
from commitart.signature import derive_signature

WIDTH, HEIGHT = 800, 400


def test_population_is_capped() -> None:
    descriptor = make_descriptor(commit_count=200)
    signature = derive_signature(descriptor)
    particles = map_commits(descriptor.commits, signature, WIDTH, HEIGHT)
    commits = [p for p in particles if not p.is_background]
    assert len(commits) == PARTICLE_CAP
    assert [p.commit for p in commits] == list(descriptor.commits[:PARTICLE_CAP])
    assert [p.index for p in particles] == list(range(len(particles)))
    assert len(particles) <= MAX_POPULATION


@pytest.mark.parametrize("profile", PROFILES, ids=lambda profile: profile.key)
def test_background_particles_stay_under_population_limit(profile) -> None:
    descriptor = make_descriptor(commit_count=200)
    signature = dataclasses.replace(derive_signature(descriptor), style_profile=profile)
    particles = map_commits(descriptor.commits, signature, WIDTH, HEIGHT)
    assert len(particles) <= MAX_POPULATION
    assert sum(1 for p in particles if not p.is_background) == PARTICLE_CAP


def test_negative_change_total_gets_minimum_size() -> None:
    commit = Commit(id="neg", author_name="alice", timestamp=1.6e12, stats=ChangeStats(total=-3))
    window = time_window([commit], 0)
    p = map_commit(commit, 0, 1.6e12, window, WIDTH, HEIGHT)
    assert p.size == 2
    assert p.vx == 0 and p.vy == 0


def test_mapping_formulas() -> None:
    commit = Commit(id="abc", author_name="alice", timestamp=1.6e12 + 5 * DAY_MS, message="x" * 13, stats=ChangeStats(total=99))
    window = time_window([commit], 0)
    p = map_commit(commit, 0, 1.6e12 + 5 * DAY_MS, window, WIDTH, HEIGHT)
    author_hash, commit_hash = p.author_hash, p.commit_hash
    assert p.x == pytest.approx(0.5 * WIDTH + (13 % 20 - 10) * 2)
    assert p.y == pytest.approx((author_hash % 5 + 1) * HEIGHT / 6 + commit_hash % 100 - 50)
    assert p.size == pytest.approx(min(15, max(2, math.log(100) * 3)))
    assert p.hue == author_hash % 360
    assert p.alpha == pytest.approx(0.5 + (commit_hash % 50) / 100)
    assert (p.origin_x, p.origin_y) == (p.x, p.y)


def test_message_only_moves_x() -> None:
    base = Commit(id="same-id", author_name="bob", timestamp=1.6e12, message="a")
    other = dataclasses.replace(base, message="abcd")
    window = time_window([base, other], 1)
    a = map_commit(base, 0, 1.6e12, window, WIDTH, HEIGHT)
    b = map_commit(other, 0, 1.6e12, window, WIDTH, HEIGHT)
    assert b.x - a.x == pytest.approx(6)
    assert (a.y, a.size, a.hue, a.alpha, a.vx, a.vy) == (b.y, b.size, b.hue, b.alpha, b.vx, b.vy)


def test_message_edit_only_moves_its_own_particle(acme) -> None:
    commits = list(acme.commits)
    commits[7] = dataclasses.replace(commits[7], message="a much longer rewritten message")
    edited = dataclasses.replace(acme, commits=commits)
    before_signature, after_signature = derive_signature(acme), derive_signature(edited)
    assert after_signature.style_id == before_signature.style_id
    assert after_signature.primary_hue == before_signature.primary_hue
    before = map_commits(acme.commits, before_signature, WIDTH, HEIGHT)
    after = map_commits(edited.commits, after_signature, WIDTH, HEIGHT)
    moved = [i for i, (a, b) in enumerate(zip(before, after)) if a.x != b.x]
    assert moved == [7]
    assert [(p.y, p.size, p.hue) for p in before] == [(p.y, p.size, p.hue) for p in after]


def test_missing_stats_default_to_ten() -> None:
    commit = Commit(id="z", author_email="dev@test.com", timestamp=1.6e12)
    window = time_window([commit], 3)
    p = map_commit(commit, 0, 1.6e12, window, WIDTH, HEIGHT)
    assert p.size == pytest.approx(math.log(11) * 3)


def test_single_timestamp_window_is_widened() -> None:
    window = time_window([Commit(timestamp=1.6e12)], 0)
    assert window.min_time == 1.6e12 - DAY_MS
    assert window.max_time == 1.6e12 + DAY_MS


def test_window_without_valid_timestamps() -> None:
    commits = [Commit(id=str(i), timestamp="not a date") for i in range(3)]
    window = time_window(commits, 1500)
    anchor = 1.5e12 + (1500 % 1000) * DAY_MS
    assert window.max_time == anchor
    assert window.min_time == anchor - 365 * DAY_MS
    assert list(window.times) == pytest.approx([window.min_time, (window.min_time + window.max_time) / 2, window.max_time])


def test_invalid_timestamp_is_interpolated_inside_window() -> None:
    commits = [Commit(timestamp=1.6e12), Commit(timestamp=None), Commit(timestamp=1.6e12 + 10 * DAY_MS)]
    window = time_window(commits, 0)
    assert window.min_time <= window.times[1] <= window.max_time


def test_non_finite_particles_are_dropped(acme) -> None:
    signature = derive_signature(acme)
    assert map_commits(acme.commits, signature, float("inf"), HEIGHT) == []


def test_ghost_particles_for_flow_profiles(acme) -> None:
    signature = dataclasses.replace(derive_signature(acme), style_profile=profile_by_key("flow-silk"))
    particles = map_commits(acme.commits, signature, WIDTH, HEIGHT)
    ghosts = [p for p in particles if p.is_background]
    assert len(ghosts) == 50
    assert all(g.commit is None and g.hue == signature.secondary_hue for g in ghosts)
    assert ghosts[0].index == 50


def test_empty_commit_list(empty_repo) -> None:
    signature = derive_signature(empty_repo)
    assert map_commits(empty_repo.commits, signature, WIDTH, HEIGHT) == []
