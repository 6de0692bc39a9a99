from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import TYPE_CHECKING, Iterable, List, Tuple

from ..errors import CrossFileComparisonError, SpanAcrossFilesError

if TYPE_CHECKING:
    from .source import LedgerFile


# Context used when a single location is displayed on its own.
DEFAULT_LINES_CONTEXT = 1


@total_ordering
@dataclass(frozen=True, eq=False)
class Location:
    """Zero-based, end-exclusive line range within one ledger file."""

    file: "LedgerFile"
    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        if self.start_line < 0 or self.end_line < self.start_line:
            raise ValueError(f"invalid line range {self.start_line}..{self.end_line}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        return (
            self.file == other.file
            and self.start_line == other.start_line
            and self.end_line == other.end_line
        )

    def __hash__(self) -> int:
        return hash((self.file.identity, self.start_line, self.end_line))

    def __lt__(self, other: "Location") -> bool:
        if not isinstance(other, Location):
            return NotImplemented
        if self.file != other.file:
            raise CrossFileComparisonError(self.file.identity, other.file.identity)
        return (self.start_line, self.end_line) < (other.start_line, other.end_line)

    def __repr__(self) -> str:
        return f"Location({self.file.identity!r}, {self.start_line}, {self.end_line})"

    def __str__(self) -> str:
        return self.with_context(DEFAULT_LINES_CONTEXT).render()

    def sort_key(self) -> Tuple[str, int, int]:
        """Total order across files, used for canonical sorting."""
        return (self.file.identity, self.start_line, self.end_line)

    def source_text(self) -> str:
        return "".join(self.file.lines(keepends=True)[self.start_line : self.end_line])

    def with_context(self, lines_context: int) -> "LocationSpan":
        return LocationSpan([self], lines_context)


class LocationSpan:
    """One or more locations of the same file rendered as a single block."""

    def __init__(self, locations: Iterable[Location], lines_context: int = DEFAULT_LINES_CONTEXT):
        locations = list(locations)
        if not locations:
            raise ValueError("a span needs at least one location")
        if len({location.file for location in locations}) > 1:
            raise SpanAcrossFilesError()
        if lines_context < 0:
            raise ValueError("lines_context must be non-negative")

        self.locations: List[Location] = sorted(locations, key=lambda loc: (loc.start_line, loc.end_line))
        self.lines_context = lines_context

    @property
    def file(self) -> "LedgerFile":
        return self.locations[0].file

    @property
    def start_line(self) -> int:
        return min(location.start_line for location in self.locations)

    @property
    def end_line(self) -> int:
        return max(location.end_line for location in self.locations)

    def header(self) -> str:
        first, last = self.start_line, self.end_line
        if last - first <= 1:
            return f"--> {self.file.display_name}:{first + 1}"
        return f"--> {self.file.display_name}:{first + 1}-{last}"

    def render(self) -> str:
        highlighted = set()
        for location in self.locations:
            highlighted.update(range(location.start_line, location.end_line))

        first = max(self.start_line - self.lines_context, 0)
        last = self.end_line + self.lines_context

        out = [self.header()]
        lines = self.file.lines()
        for line_number in range(first, min(last, len(lines))):
            line = lines[line_number]
            if line_number in highlighted:
                out.append(f"{line_number + 1: >4} | {line}")
            else:
                out.append(f"     | {line}")
        return "\n".join(out) + "\n"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"LocationSpan({self.locations!r}, lines_context={self.lines_context})"


def to_span(
    locations: Iterable[Location],
    tolerance: int,
    lines_context: int = DEFAULT_LINES_CONTEXT,
) -> List[LocationSpan]:
    """Group locations into display spans.

    Locations are walked in (file, start line) order; a location joins the
    current group when it belongs to the same file and starts no more than
    `tolerance` lines after the group's highest end line.
    """
    ordered = sorted(locations, key=lambda loc: (loc.file.identity, loc.start_line, loc.end_line))
    if not ordered:
        return []

    spans: List[LocationSpan] = []
    group: List[Location] = [ordered[0]]
    highest = ordered[0].end_line
    for location in ordered[1:]:
        if location.file == group[0].file and location.start_line <= highest + tolerance:
            group.append(location)
            highest = max(highest, location.end_line)
        else:
            spans.append(LocationSpan(group, lines_context))
            group = [location]
            highest = location.end_line
    spans.append(LocationSpan(group, lines_context))
    return spans
