"""Deterministic generative artwork from repository history."""

from .descriptor import ChangeStats, Commit, Contributor, RepositoryDescriptor, descriptor_from_mapping, parse_repo_slug
from .fallback import synthetic_descriptor
from .signature import Signature, derive_signature
from .visualizer import Visualizer

__all__ = [
    "ChangeStats",
    "Commit",
    "Contributor",
    "RepositoryDescriptor",
    "Signature",
    "Visualizer",
    "derive_signature",
    "descriptor_from_mapping",
    "parse_repo_slug",
    "synthetic_descriptor",
]

__version__ = "0.1.0"
