from presto_client.collectors import AssocCollector, Collector
from presto_client.processor import Processor
from presto_client.result import TabularResult


class QueryBuilder:
    """Holds a raw statement and runs it through a :class:`Processor`."""

    def __init__(self, processor: Processor) -> None:
        self._processor = processor
        self._raw = ""

    def raw(self, query: str) -> "QueryBuilder":
        """Set the raw SQL statement."""
        self._raw = query
        return self

    def to_sql(self) -> str:
        """Return the statement that will be submitted."""
        return self._raw

    async def get(self) -> TabularResult:
        """Execute the statement and return positional rows."""
        return await self._processor.execute(self.to_sql(), Collector())

    async def get_assoc(self) -> TabularResult:
        """Execute the statement and return rows keyed by column name."""
        return await self._processor.execute(self.to_sql(), AssocCollector())
