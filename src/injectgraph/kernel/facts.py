"""Pydantic models for the structural facts supplied by the source-analysis layer.

One ClassFacts record per decorated class, one ParameterFacts record per
constructor parameter. The models only describe what was written in the
source; deciding what a parameter means is the resolver's job.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .model import NodeKind, SourceLocation

LEGACY_INJECT = "Inject"
QUALIFIER_DECORATORS = {
    "Optional": "optional",
    "Self": "self",
    "SkipSelf": "skipSelf",
    "Host": "host",
}
RECOGNIZED_DECORATORS = frozenset({LEGACY_INJECT, *QUALIFIER_DECORATORS})


class DecoratorFact(BaseModel):
    """A parameter decorator, e.g. @Inject(TOKEN) or @Optional()."""
    name: str
    token: Optional[str] = None  # Only meaningful for Inject

    model_config = ConfigDict(extra="forbid")

    @field_validator("name")
    @classmethod
    def strip_at_sign(cls, v: str) -> str:
        """Accept both "Optional" and "@Optional"."""
        return v.strip().lstrip("@")


class InjectOptions(BaseModel):
    """Options record of the functional injection call."""
    optional: Optional[bool] = None
    self_: Optional[bool] = Field(None, alias="self")
    skip_self: Optional[bool] = Field(None, alias="skipSelf")
    host: Optional[bool] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class InjectCall(BaseModel):
    """A functional injection expression: inject(TOKEN, {optional: true, ...})."""
    token: Optional[str] = None
    options: Optional[InjectOptions] = None

    model_config = ConfigDict(extra="forbid")


class ParameterFacts(BaseModel):
    """Syntactic facts about one constructor parameter."""
    name: str
    type: Optional[str] = None  # Type name, or the literal "any" / "unknown"
    type_resolved: bool = Field(True, alias="typeResolved")  # False when the type's import could not be resolved
    decorators: List[DecoratorFact] = Field(default_factory=list)
    inject_call: Optional[InjectCall] = Field(None, alias="injectCall")
    location: Optional[SourceLocation] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ClassFacts(BaseModel):
    """Syntactic facts about one decorated class."""
    name: Optional[str] = None  # None for anonymous classes
    kind: NodeKind = "unknown"
    file_path: str = Field("", alias="filePath")
    parameters: List[ParameterFacts] = Field(default_factory=list)
    location: Optional[SourceLocation] = None

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class FactsDocument(BaseModel):
    """Top-level facts file: {"classes": [...]}."""
    classes: List[ClassFacts] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
