from dataclasses import dataclass
from typing import Dict

STATEMENT_PATH = "/v1/statement"


@dataclass(frozen=True)
class Connection:
    """Coordinates of a Presto coordinator and the identity used against it."""

    host: str
    user: str
    schema: str
    catalog: str

    def statement_uri(self) -> str:
        """Return the absolute URI statements are submitted to."""
        return f"{self.host.rstrip('/')}{STATEMENT_PATH}"

    def headers(self) -> Dict[str, str]:
        """Return the identity headers sent with the initial statement."""
        return {
            "X-Presto-User": self.user,
            "X-Presto-Schema": self.schema,
            "X-Presto-Catalog": self.catalog,
        }
