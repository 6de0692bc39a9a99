from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

from ..ledger.location import DEFAULT_LINES_CONTEXT, Location, LocationSpan, to_span

# Tolerance used when deciding whether the sites of a multi-location finding
# render as one merged block or as separate blocks.
DEFAULT_SPAN_TOLERANCE = 10


class Severity(str, Enum):
    INFO = "INFO"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Finding(ABC):
    """Output of one lint for one detected problem."""

    @abstractmethod
    def headline(self) -> str:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def locations(self) -> List[Location]:  # pragma: no cover
        raise NotImplementedError

    def spans(
        self,
        tolerance: int = DEFAULT_SPAN_TOLERANCE,
        lines_context: int = DEFAULT_LINES_CONTEXT,
    ) -> List[LocationSpan]:
        locations = self.locations()
        if len(locations) == 1:
            return [locations[0].with_context(lines_context)]
        return to_span(locations, tolerance, lines_context)

    def render(
        self,
        tolerance: int = DEFAULT_SPAN_TOLERANCE,
        lines_context: int = DEFAULT_LINES_CONTEXT,
    ) -> str:
        parts = [f"warning: {self.headline()}\n"]
        for span in self.spans(tolerance, lines_context):
            parts.append(f"{span.render()}\n")
        return "".join(parts)

    def __str__(self) -> str:
        return self.render()


class LocationRecord(BaseModel):
    file: str
    start_line: int
    end_line: int

    @classmethod
    def from_location(cls, location: Location) -> "LocationRecord":
        return cls(
            file=location.file.display_name,
            start_line=location.start_line,
            end_line=location.end_line,
        )


class FindingRecord(BaseModel):
    lint_id: str
    lint_title: str
    severity: Severity = Severity.MEDIUM
    message: str
    locations: List[LocationRecord] = Field(default_factory=list)
    rendered: str = ""


class LintRunReport(BaseModel):
    run_id: str
    generated_at: datetime

    findings: List[FindingRecord] = Field(default_factory=list)
    totals: Dict[str, int] = Field(default_factory=dict)

    @property
    def has_findings(self) -> bool:
        return bool(self.findings)
