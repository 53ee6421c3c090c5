"""Exporters writing generated relations to files."""

from .file_exporter import (
    EXPORT_FORMATS,
    CsvTupleExporter,
    JsonlTupleExporter,
    TupleExporter,
    create_exporter,
)

__all__ = [
    "TupleExporter",
    "JsonlTupleExporter",
    "CsvTupleExporter",
    "EXPORT_FORMATS",
    "create_exporter",
]
