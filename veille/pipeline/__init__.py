"""Ingestion pipeline."""

from .orchestrator import (
    NO_ARTICLES_MESSAGE,
    IngestionPipeline,
    PipelineStage,
    RunSummary,
    print_run_summary,
)

__all__ = [
    "NO_ARTICLES_MESSAGE",
    "IngestionPipeline",
    "PipelineStage",
    "RunSummary",
    "print_run_summary",
]
