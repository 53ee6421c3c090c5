"""Column descriptor for generated relations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnMetaData:
    """
    Describes the columns of a generated relation.

    Column 0 is the tuple id; the data columns follow as col0, col1, ...
    """

    max_values: tuple[int, ...]

    @property
    def column_count(self) -> int:
        """Number of columns including the id column."""
        return len(self.max_values) + 1

    @property
    def column_names(self) -> list[str]:
        return ["id"] + [f"col{i}" for i in range(len(self.max_values))]

    def max_value(self, column: int) -> int:
        """Highest level of data column `column` (0-based, id column not counted)."""
        return self.max_values[column]

    def min_value(self, column: int) -> int:
        if not 0 <= column < len(self.max_values):
            raise IndexError(f"column {column} out of range")
        return 0
