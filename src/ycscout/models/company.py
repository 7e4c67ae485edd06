"""Company records extracted from the Y Combinator directory.

``CompanyList`` doubles as the extraction schema handed to the page
extraction client; ``ScoutResult`` captures the outcome of one scout run.
Wire field names follow the public JSON contract (``isPublic``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CompanyRecord(BaseModel):
    """A single company as returned by the extraction model."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Company name.")
    description: str = Field(..., description="A brief description of what the company does.")
    website: str = Field(..., description="Company website URL from its YC company page.")
    location: str | None = Field(None, description="City, state, country, or 'Remote'.")
    is_public: bool | None = Field(
        None,
        alias="isPublic",
        description="Whether the company is publicly traded.",
    )
    batch: str | None = Field(None, description="Y Combinator batch, e.g. 'Summer 2024'.")


class CompanyList(BaseModel):
    """Top-level extraction schema: the list of matched companies."""

    companies: list[CompanyRecord] = Field(default_factory=list)


@dataclass
class ScoutResult:
    """Outcome of one scout run (query → companies)."""

    query: str
    companies: list[CompanyRecord] = field(default_factory=list)
    requested_count: int = 5
    session_id: str = ""
    elapsed_ms: float = 0.0

    @property
    def returned_count(self) -> int:
        """Number of companies the extraction actually produced."""
        return len(self.companies)

    def to_envelope(self) -> dict[str, Any]:
        """Serialize to the public success envelope.

        ``results`` carries the extraction verbatim; the two count fields
        expose the gap between what was asked for and what came back.
        """
        return {
            "query": self.query,
            "results": {"companies": [c.model_dump(mode="json", by_alias=True) for c in self.companies]},
            "requested_count": self.requested_count,
            "returned_count": self.returned_count,
        }
