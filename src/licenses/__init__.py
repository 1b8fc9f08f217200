"""License bucket computation and report rendering."""

from .closure import Bucket, append_packages, collect_all, compute_required_closure, sort_bucket
from .report import render

__all__ = [
    "Bucket",
    "append_packages",
    "collect_all",
    "compute_required_closure",
    "render",
    "sort_bucket",
]
