from address_clustering.pipeline.analyzer import main_analyze, run_analyzer
from address_clustering.pipeline.builder import main_build, run_builder

__all__ = ["main_analyze", "main_build", "run_analyzer", "run_builder"]
