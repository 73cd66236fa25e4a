"""Configuration consumed by the graph engine."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Direction = Literal["downstream", "upstream", "both"]


class GraphConfig(BaseModel):
    """Entry/direction filtering and qualifier-flag capture."""
    direction: Direction = "downstream"
    entry: Optional[List[str]] = None
    include_decorators: bool = Field(False, alias="includeDecorators")

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    @field_validator("entry")
    @classmethod
    def validate_entry(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Reject blank ids, drop duplicates (first kept), treat [] as no entries."""
        if v is None:
            return None
        entries: List[str] = []
        for raw in v:
            entry_id = raw.strip()
            if not entry_id:
                raise ValueError("Entry ids must be non-empty strings")
            if entry_id not in entries:
                entries.append(entry_id)
        return entries or None
