# ABOUTME: Core orchestration layer
# ABOUTME: Wires fetch, wiki and cards layers into the sequential country pipeline

from .pipeline import CountryCardPipeline, build_pipeline

__all__ = [
    "CountryCardPipeline",
    "build_pipeline",
]
