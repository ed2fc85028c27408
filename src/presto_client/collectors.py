from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from presto_client.envelope import ResponseEnvelope
from presto_client.errors import MalformedResponseError
from presto_client.result import TabularResult


@runtime_checkable
class Collectorable(Protocol):
    """Accumulates the rows of one query execution across envelopes."""

    def collect(self, envelope: ResponseEnvelope) -> None:
        """Consume the columns and rows carried by one envelope."""
        ...

    def get(self) -> TabularResult:
        """Return the accumulated result."""
        ...


class Collector:
    """Collects rows positionally, in arrival order."""

    def __init__(self) -> None:
        self._rows: List[List[Any]] = []
        self._columns: Optional[List[str]] = None

    def collect(self, envelope: ResponseEnvelope) -> None:
        if self._columns is None:
            self._columns = envelope.column_names
        if envelope.data:
            self._rows.extend(list(row) for row in envelope.data)

    def get(self) -> TabularResult:
        return TabularResult(self._rows, self._columns)


class AssocCollector:
    """Collects rows as ``{column name: value}`` mappings in column order."""

    def __init__(self) -> None:
        self._rows: List[Dict[str, Any]] = []
        self._columns: Optional[List[str]] = None

    def collect(self, envelope: ResponseEnvelope) -> None:
        if self._columns is None:
            self._columns = envelope.column_names
        if not envelope.data:
            return
        if self._columns is None:
            raise MalformedResponseError("Rows arrived before any column announcement.")
        width = len(self._columns)
        for row in envelope.data:
            if len(row) != width:
                raise MalformedResponseError(
                    f"Row has {len(row)} values but {width} columns were announced."
                )
            self._rows.append(dict(zip(self._columns, row)))

    def get(self) -> TabularResult:
        return TabularResult(self._rows, self._columns)
