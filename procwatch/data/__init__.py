"""Data provider package."""

from .process import ProcessResourceSampler, ResourceSampler

__all__ = [
    "ProcessResourceSampler",
    "ResourceSampler",
]
