"""Address Clustering - Group addresses by the multi-input heuristic."""

from address_clustering.pipeline import run_analyzer, run_builder

__all__ = ["run_builder", "run_analyzer"]
