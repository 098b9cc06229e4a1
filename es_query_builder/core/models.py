"""
Shared data models for the search layer.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ConnectionConfig(BaseModel):
    """Location and credentials of an Elasticsearch cluster."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    host: str = "localhost"
    port: int = 9200
    user: Optional[str] = None
    password: Optional[str] = Field(default=None, alias="pass")
    scheme: str = "http"

    @property
    def url(self) -> str:
        """Host URL in the form the official client expects."""
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def basic_auth(self) -> Optional[tuple]:
        if self.user is None:
            return None
        return (self.user, self.password or "")

    def to_dict(self) -> Dict[str, Any]:
        """Return the {host, port, user, pass, scheme} mapping models expose."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "pass": self.password,
            "scheme": self.scheme,
        }


class SortSpec(BaseModel):
    """One entry of the request's sort list."""

    field: str
    order: str = "desc"
    params: Dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        body = dict(self.params)
        if self.order:
            body["order"] = self.order
        return {self.field: body}
