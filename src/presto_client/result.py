from collections.abc import Sequence
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar, Union

T = TypeVar("T")

ResultRow = Union[List[Any], Dict[str, Any]]


class TabularResult(Sequence):
    """Ordered rows of a finished query plus the column names the engine announced.

    Rows are lists for positional results and dicts for named results. The
    container is read-only; transformations return plain lists.
    """

    def __init__(self, rows: Optional[List[ResultRow]] = None, columns: Optional[List[str]] = None):
        self._rows: List[ResultRow] = list(rows or [])
        self._columns: List[str] = list(columns or [])

    @property
    def rows(self) -> List[ResultRow]:
        """Return a copy of the rows in arrival order."""
        return list(self._rows)

    @property
    def columns(self) -> List[str]:
        """Return column names in engine order (empty when none were announced)."""
        return list(self._columns)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[ResultRow]:
        return iter(self._rows)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return TabularResult(self._rows[index], self._columns)
        return self._rows[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TabularResult):
            return self._rows == other._rows and self._columns == other._columns
        if isinstance(other, list):
            return self._rows == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"TabularResult(rows={self._rows!r}, columns={self._columns!r})"

    def first(self, default: Any = None) -> Any:
        """Return the first row, or ``default`` when the result is empty."""
        return self._rows[0] if self._rows else default

    def map(self, func: Callable[[ResultRow], T]) -> List[T]:
        """Apply ``func`` to every row."""
        return [func(row) for row in self._rows]

    def pluck(self, column: Union[str, int]) -> List[Any]:
        """Return one column's values.

        ``column`` is a name for named rows; for positional rows it may be a
        position or one of the announced column names.
        """
        if isinstance(column, str) and self._rows and isinstance(self._rows[0], list):
            if column not in self._columns:
                raise KeyError(column)
            column = self._columns.index(column)
        return [row[column] for row in self._rows]

    def to_list(self) -> List[ResultRow]:
        """Return the rows as a plain list."""
        return list(self._rows)
