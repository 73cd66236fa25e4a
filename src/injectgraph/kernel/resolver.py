"""Resolve constructor parameter facts into dependency records.

Token precedence (first rule that yields a token wins):
1. An explicit token from the legacy @Inject(TOKEN) decorator
2. An explicit token from the functional inject(TOKEN, {...}) call
3. The static type name, unless one of the skip rules applies

Skip rules (only consulted when no explicit token was given); the parameter
produces no dependency and a warning is recorded:
- no type annotation at all
- the type is the literal "any" or "unknown"
- the type is a primitive (string, number, ...)
- the type's import could not be resolved

Qualifier flags are the field-wise OR of the legacy qualifier decorators
(@Optional, @Self, @SkipSelf, @Host) and the functional call's options record.
"""

import logging
from typing import Callable, List, NamedTuple, Optional

from injectgraph._internal.logging import LogCategory, log_event
from injectgraph.codes import WarningCategory

from .diagnostics import DiagnosticsContext
from .facts import (
    LEGACY_INJECT,
    QUALIFIER_DECORATORS,
    RECOGNIZED_DECORATORS,
    ClassFacts,
    ParameterFacts,
)
from .model import EdgeFlags, ResolvedClass, ResolvedDependency

logger = logging.getLogger(__name__)

UNTYPED_MARKERS = frozenset({"any", "unknown"})
PRIMITIVE_TYPES = frozenset({
    "string", "number", "boolean", "symbol", "bigint", "object",
    "undefined", "null", "void", "never",
})


class SkipReason(NamedTuple):
    category: WarningCategory
    message: str
    suggestion: str


def _non_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


# Explicit token rules ----------------------------------------------------

def _token_from_inject_decorator(param: ParameterFacts) -> Optional[str]:
    for decorator in param.decorators:
        if decorator.name == LEGACY_INJECT:
            token = _non_blank(decorator.token)
            if token:
                return token
    return None


def _token_from_inject_call(param: ParameterFacts) -> Optional[str]:
    if param.inject_call is None:
        return None
    return _non_blank(param.inject_call.token)


EXPLICIT_TOKEN_RULES: List[Callable[[ParameterFacts], Optional[str]]] = [
    _token_from_inject_decorator,
    _token_from_inject_call,
]


# Skip rules --------------------------------------------------------------

def _skip_missing_type(param: ParameterFacts, owner: str) -> Optional[SkipReason]:
    if param.type is not None:
        return None
    return SkipReason(
        WarningCategory.TYPE_RESOLUTION,
        f"Skipping parameter '{param.name}' of {owner}: no type annotation or injection token",
        "Add a type annotation or an explicit injection token (@Inject(TOKEN) or inject(TOKEN))",
    )


def _skip_untyped(param: ParameterFacts, owner: str) -> Optional[SkipReason]:
    if param.type not in UNTYPED_MARKERS:
        return None
    return SkipReason(
        WarningCategory.TYPE_RESOLUTION,
        f"Skipping parameter '{param.name}' of {owner} with any/unknown type",
        "Add an explicit injection token (@Inject(TOKEN) or inject(TOKEN)) or a concrete type annotation",
    )


def _skip_primitive(param: ParameterFacts, owner: str) -> Optional[SkipReason]:
    if param.type not in PRIMITIVE_TYPES:
        return None
    return SkipReason(
        WarningCategory.SKIPPED_TYPES,
        f"Skipping primitive type parameter '{param.name}' of {owner}: {param.type}",
        "Provide primitive values through an injection token with @Inject(TOKEN) or inject(TOKEN)",
    )


def _skip_unresolved_import(param: ParameterFacts, owner: str) -> Optional[SkipReason]:
    if param.type_resolved:
        return None
    return SkipReason(
        WarningCategory.UNRESOLVED_IMPORTS,
        f"Unresolved type '{param.type}' for parameter '{param.name}' of {owner}",
        f"Check the import of '{param.type}' and that it is exported from its module",
    )


SKIP_RULES: List[Callable[[ParameterFacts, str], Optional[SkipReason]]] = [
    _skip_missing_type,
    _skip_untyped,
    _skip_primitive,
    _skip_unresolved_import,
]


# Flags -------------------------------------------------------------------

def legacy_flags(param: ParameterFacts) -> Optional[EdgeFlags]:
    """Flags asserted by qualifier decorators; each one asserts True."""
    asserted = {
        QUALIFIER_DECORATORS[d.name]: True
        for d in param.decorators
        if d.name in QUALIFIER_DECORATORS
    }
    return EdgeFlags(**asserted) if asserted else None


def inject_call_flags(param: ParameterFacts) -> Optional[EdgeFlags]:
    """Flags from the functional call's options record, as written."""
    if param.inject_call is None or param.inject_call.options is None:
        return None
    options = param.inject_call.options
    flags = EdgeFlags(
        optional=options.optional,
        self_=options.self_,
        skip_self=options.skip_self,
        host=options.host,
    )
    return None if flags.is_empty() else flags


def merge_flags(*sources: Optional[EdgeFlags]) -> Optional[EdgeFlags]:
    """Field-wise OR of any number of flag records; None when nothing is asserted."""
    merged: Optional[EdgeFlags] = None
    for flags in sources:
        if flags is None:
            continue
        merged = flags if merged is None else merged.merge(flags)
    if merged is None or merged.is_empty():
        return None
    return merged


# Resolution --------------------------------------------------------------

def _record_stats(param: ParameterFacts, flags: Optional[EdgeFlags], diagnostics: DiagnosticsContext) -> None:
    stats = diagnostics.stats
    stats.total_parameters += 1

    has_qualifier = False
    for decorator in param.decorators:
        if decorator.name not in RECOGNIZED_DECORATORS:
            stats.skipped_decorators.append(
                {"name": decorator.name, "reason": "Not a recognized injection decorator"}
            )
            continue
        stats.legacy_decorators_used += 1
        if decorator.name in QUALIFIER_DECORATORS:
            has_qualifier = True

    if param.inject_call is not None:
        stats.inject_patterns_used += 1

    if flags is not None:
        for name, value in flags.as_dict().items():
            if value:
                stats.decorator_counts[name] += 1

    if has_qualifier or flags is not None:
        stats.parameters_with_decorators += 1
    else:
        stats.parameters_without_decorators += 1


def resolve_parameter(
    param: ParameterFacts,
    diagnostics: DiagnosticsContext,
    owner: str = "<class>",
    file_path: str = "",
) -> Optional[ResolvedDependency]:
    """Resolve one constructor parameter, or return None if it is skipped."""
    flags = merge_flags(legacy_flags(param), inject_call_flags(param))
    _record_stats(param, flags, diagnostics)

    token = None
    for rule in EXPLICIT_TOKEN_RULES:
        token = rule(param)
        if token:
            break

    if token is None:
        for skip_rule in SKIP_RULES:
            reason = skip_rule(param, owner)
            if reason is not None:
                diagnostics.warn(
                    reason.category,
                    reason.message,
                    file=file_path,
                    line=param.location.line if param.location else None,
                    column=param.location.column if param.location else None,
                    suggestion=reason.suggestion,
                )
                return None
        token = param.type

    log_event(
        logger, logging.DEBUG, LogCategory.TYPE_RESOLUTION,
        f"Resolved parameter '{param.name}' of {owner}",
        token=token, flags=flags.as_dict() if flags else None,
    )
    return ResolvedDependency(token=token, parameter_name=param.name, flags=flags)


def resolve_class(
    facts: ClassFacts,
    diagnostics: DiagnosticsContext,
    position: Optional[int] = None,
) -> Optional[ResolvedClass]:
    """Resolve every constructor parameter of a class.

    Anonymous classes are rejected before any parameter is looked at.
    `position` is the 1-based index of the record in its input batch; it
    keeps the warnings of several anonymous classes in one file apart.
    """
    name = _non_blank(facts.name)
    if name is None:
        message = f"Skipping anonymous {facts.kind} class"
        if facts.file_path:
            message += f" in {facts.file_path}"
        if position is not None:
            message += f" (class record {position})"
        diagnostics.warn(
            WarningCategory.SKIPPED_CLASSES,
            message,
            file=facts.file_path,
            line=facts.location.line if facts.location else None,
            column=facts.location.column if facts.location else None,
            suggestion="Give the class a name so it can be included in the dependency graph",
        )
        return None

    dependencies = []
    for param in facts.parameters:
        dependency = resolve_parameter(param, diagnostics, owner=name, file_path=facts.file_path)
        if dependency is not None:
            dependencies.append(dependency)

    return ResolvedClass(
        name=name,
        kind=facts.kind,
        file_path=facts.file_path,
        dependencies=dependencies,
        location=facts.location,
    )


def resolve_classes(classes: List[ClassFacts], diagnostics: DiagnosticsContext) -> List[ResolvedClass]:
    """Resolve classes in input order, dropping the ones that cannot be named."""
    resolved = []
    for position, facts in enumerate(classes, start=1):
        resolved_class = resolve_class(facts, diagnostics, position=position)
        if resolved_class is not None:
            resolved.append(resolved_class)
    log_event(
        logger, logging.INFO, LogCategory.TYPE_RESOLUTION,
        "Resolved decorated classes",
        input_classes=len(classes), resolved_classes=len(resolved),
    )
    return resolved
