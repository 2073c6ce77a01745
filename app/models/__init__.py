"""Database models."""

from sqlalchemy import MetaData

from app.models.appointments import appointments
from app.models.appointments import metadata as appointments_metadata
from app.models.coverage_applications import coverage_applications
from app.models.coverage_applications import metadata as coverage_applications_metadata


def combined_metadata() -> MetaData:
    """Collect every table into a single MetaData for create_all/drop_all."""
    metadata = MetaData()
    for source in (appointments_metadata, coverage_applications_metadata):
        for table in source.tables.values():
            table.to_metadata(metadata)
    return metadata


__all__ = [
    "appointments",
    "combined_metadata",
    "coverage_applications",
]
