"""Graph data model: nodes, edges, qualifier flags and resolved classes."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

NodeKind = Literal["service", "component", "directive", "unknown"]

FLAG_NAMES = ("optional", "self", "skipSelf", "host")


class EdgeFlags(BaseModel):
    """Qualifier flags of one dependency.

    A field left as None means the flag was never asserted; False only
    appears when a source explicitly resolved it as false.
    """
    optional: Optional[bool] = None
    self_: Optional[bool] = Field(None, alias="self")
    skip_self: Optional[bool] = Field(None, alias="skipSelf")
    host: Optional[bool] = None

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    def is_empty(self) -> bool:
        return all(value is None for value in self.as_dict(include_unset=True).values())

    def as_dict(self, include_unset: bool = False) -> Dict[str, Optional[bool]]:
        """Return flags keyed by their wire names (optional/self/skipSelf/host)."""
        values = {
            "optional": self.optional,
            "self": self.self_,
            "skipSelf": self.skip_self,
            "host": self.host,
        }
        if include_unset:
            return values
        return {name: value for name, value in values.items() if value is not None}

    def merge(self, other: Optional["EdgeFlags"]) -> "EdgeFlags":
        """Field-wise OR: True wins, then an explicit False, else unset."""
        if other is None:
            return self
        mine = self.as_dict(include_unset=True)
        theirs = other.as_dict(include_unset=True)
        merged: Dict[str, Optional[bool]] = {}
        for name in FLAG_NAMES:
            pair = (mine[name], theirs[name])
            if True in pair:
                merged[name] = True
            elif False in pair:
                merged[name] = False
            else:
                merged[name] = None
        return EdgeFlags(**merged)


class SourceLocation(BaseModel):
    line: int = Field(..., ge=1)
    column: Optional[int] = Field(None, ge=1)

    model_config = ConfigDict(extra="forbid", frozen=True)


class Node(BaseModel):
    id: str = Field(..., min_length=1)
    kind: NodeKind = "unknown"

    model_config = ConfigDict(extra="forbid", frozen=True)


class Edge(BaseModel):
    """Directed dependency edge. `to` is a token and may not match any node."""
    from_: str = Field(..., alias="from")
    to: str
    flags: Optional[EdgeFlags] = None
    is_circular: Optional[bool] = Field(None, alias="isCircular")

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    @property
    def is_self_loop(self) -> bool:
        return self.from_ == self.to


class Graph(BaseModel):
    """Nodes and edges in discovery order plus the detected cycles."""
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)
    circular_dependencies: List[List[str]] = Field(default_factory=list, alias="circularDependencies")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Wire form: camelCase keys, absent flags / isCircular omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ResolvedDependency(BaseModel):
    token: str = Field(..., min_length=1)
    parameter_name: str = Field(..., alias="parameterName")
    flags: Optional[EdgeFlags] = None

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class ResolvedClass(BaseModel):
    """Assembler input. A missing or blank name drops the record with a warning."""
    name: Optional[str] = None
    kind: NodeKind = "unknown"
    file_path: Optional[str] = Field(None, alias="filePath")
    dependencies: List[ResolvedDependency] = Field(default_factory=list)
    location: Optional[SourceLocation] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
