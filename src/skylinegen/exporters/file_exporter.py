"""
File-based exporters for generated relations.

Writes tuples to disk for:
- Loading into a database or another query engine
- Test fixtures
- Comparing relations across runs
"""

import csv
import json
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from ..levels.level_tuple import LevelTuple


class TupleExporter(ABC):
    """Base class for file exporters; subclasses write rows in their format."""

    suffix = ""

    def __init__(self, output_path: str | Path, append: bool = False):
        """Initialize file exporter."""
        self.output_path = Path(output_path)
        self.append = append
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        if not append and self.output_path.exists():
            self.output_path.unlink()

    @abstractmethod
    def export(self, tuples: Iterable[LevelTuple]) -> int:
        """Write tuples to the file and return the number of rows written."""
        pass


class JsonlTupleExporter(TupleExporter):
    """Export tuples as JSON lines: {"id": ..., "levels": [...], "col0": ..., ...}."""

    suffix = ".jsonl"

    def export(self, tuples: Iterable[LevelTuple]) -> int:
        count = 0
        with open(self.output_path, "a", encoding="utf-8") as f:
            for row in tuples:
                record = row.as_dict()
                record["levels"] = list(row.levels)
                f.write(json.dumps(record) + "\n")
                count += 1
        return count


class CsvTupleExporter(TupleExporter):
    """Export tuples as CSV with an `id,col0,col1,...` header."""

    suffix = ".csv"

    def export(self, tuples: Iterable[LevelTuple]) -> int:
        write_header = not self.output_path.exists() or self.output_path.stat().st_size == 0
        count = 0
        with open(self.output_path, "a", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            for row in tuples:
                if write_header:
                    writer.writerow(["id"] + [f"col{i}" for i in range(len(row))])
                    write_header = False
                writer.writerow([row.id, *row.levels])
                count += 1
        return count


_EXPORTERS: dict[str, type[TupleExporter]] = {
    "jsonl": JsonlTupleExporter,
    "csv": CsvTupleExporter,
}

EXPORT_FORMATS = tuple(_EXPORTERS)


def create_exporter(
    output_path: str | Path, fmt: str | None = None, append: bool = False
) -> TupleExporter:
    """Pick an exporter by explicit format, else by file suffix (default jsonl)."""
    if fmt is None:
        fmt = Path(output_path).suffix.lstrip(".").lower() or "jsonl"
        if fmt not in _EXPORTERS:
            fmt = "jsonl"
    exporter_cls = _EXPORTERS.get(fmt.lower())
    if exporter_cls is None:
        raise ValueError(f"Unknown export format: {fmt}")
    return exporter_cls(output_path, append=append)
