"""Advisory notices emitted by the rewrite pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .tree import NO_SOURCE_LOCATION, SourceLocation

logger = logging.getLogger(__name__)


class DiagnosticKind(str, Enum):
    # Candidate skipped, node passed through unchanged
    UNSUPPORTED_LABEL_EXPRESSION = "UnsupportedLabelExpression"
    MALFORMED_BLOCK_ARGUMENT = "MalformedBlockArgument"
    UNEXPECTED_ARGUMENTS = "UnexpectedArguments"
    # Informational
    NAME_COLLISION_RESOLVED = "NameCollisionResolved"


SKIP_KINDS: frozenset[DiagnosticKind] = frozenset(
    {
        DiagnosticKind.UNSUPPORTED_LABEL_EXPRESSION,
        DiagnosticKind.MALFORMED_BLOCK_ARGUMENT,
        DiagnosticKind.UNEXPECTED_ARGUMENTS,
    }
)


@dataclass(frozen=True)
class Diagnostic:
    """One non-fatal notice tied to the source position that caused it."""

    kind: DiagnosticKind
    message: str
    location: SourceLocation = NO_SOURCE_LOCATION

    def is_skip(self) -> bool:
        return self.kind in SKIP_KINDS

    def __str__(self) -> str:
        return f"{self.location}: {self.kind.value}: {self.message}"


@dataclass
class DiagnosticSink:
    """Collects notices for one rewrite invocation."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def emit(
        self,
        kind: DiagnosticKind,
        message: str,
        location: SourceLocation = NO_SOURCE_LOCATION,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, location=location)
        logger.debug("%s", diagnostic)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind == kind]
