"""
Utility classes for formatting plain-text tables.

Provides consistent table formatting for post listings and rule summaries.
"""

from typing import Any, List


class Column:
    """Column definition for table formatting."""

    def __init__(self, name: str, width: int, align: str = "<"):
        """
        Args:
            name: Column header name
            width: Column width in characters (longer values are truncated)
            align: Alignment ('<' left, '>' right, '^' center)
        """
        self.name = name
        self.width = width
        self.align = align

    def _fit(self, text: str) -> str:
        if len(text) <= self.width:
            return text
        if self.width <= 3:
            return text[: self.width]
        return text[: self.width - 3] + "..."

    def format_header(self) -> str:
        return f"{self._fit(self.name):{self.align}{self.width}}"

    def format_value(self, value: Any) -> str:
        text = "" if value is None else str(value)
        return f"{self._fit(text):{self.align}{self.width}}"


class TableFormatter:
    """Builder for text tables with aligned columns."""

    def __init__(self, columns: List[Column]):
        self.columns = columns
        self.lines: List[str] = []

    @property
    def total_width(self) -> int:
        return sum(col.width for col in self.columns) + len(self.columns) - 1

    def add_table_header(self) -> "TableFormatter":
        """Add header row followed by a separator."""
        self.lines.append(" ".join(col.format_header() for col in self.columns).rstrip())
        self.lines.append("-" * self.total_width)
        return self

    def add_row(self, values: List[Any]) -> "TableFormatter":
        """
        Add data row with column values.

        Raises:
            ValueError: If number of values doesn't match columns
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        row_parts = [col.format_value(val) for col, val in zip(self.columns, values)]
        self.lines.append(" ".join(row_parts).rstrip())
        return self

    def add_summary(self, text: str) -> "TableFormatter":
        """Add summary line after a blank line."""
        self.lines.append("")
        self.lines.append(text)
        return self

    def render(self) -> str:
        return "\n".join(self.lines)
