"""Pipeline module for news ingestion."""

from district_ingest.pipeline.base import Pipeline
from district_ingest.pipeline.ingest import IngestionOrchestrator

__all__ = [
    "IngestionOrchestrator",
    "Pipeline",
]
