"""
Section Parser - Recovers the six plan sections from a markdown response.

The model is asked for numbered, titled sections but nothing enforces it:
numbering may be missing or out of order, titles may drift, sections may be
merged or surrounded by chatter. Parsing therefore never fails. Anything
that cannot be matched to a section is dropped and missing sections get
their placeholder text.
"""
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..models.sections import (
    DISPLAY_TITLES,
    PROMPT_TITLES,
    SectionId,
    TravelPlanSections,
)

logger = logging.getLogger(__name__)


class DuplicatePolicy(str, Enum):
    """Which chunk wins when a section title appears more than once."""
    LAST = "last"
    FIRST = "first"


_HEADING_RE = re.compile(r"^(#{1,6})(?:\s+|(?=\d))(.*)$")
_NUMBER_RE = re.compile(r"^(\d{1,2})[.)]\s+(.*)$")
_FENCE_RE = re.compile(r"^(```|~~~)")
_EMPHASIS_RE = re.compile(r"[*_`]")
_TRAILING_PAREN_RE = re.compile(r"\s*\([^()]*\)\s*$")
_CLOSING_HASHES_RE = re.compile(r"\s+#+$")
_LEADING_SYMBOLS_RE = re.compile(r"^[^\w(]+")
_TRAILING_SYMBOLS_RE = re.compile(r"[^\w)]+$")
_AMPERSAND_RE = re.compile(r"\s*&\s*")
_SPACES_RE = re.compile(r"\s+")


def normalize_title(text: str) -> str:
    """
    Reduce a header title to its lookup key.

    Drops emphasis, closing hashes, leading and trailing symbols or emoji
    and a trailing parenthetical qualifier; folds '&' into 'and'; collapses
    whitespace; lowercases.
    """
    title = _EMPHASIS_RE.sub("", text)
    title = _CLOSING_HASHES_RE.sub("", title.strip())
    title = _LEADING_SYMBOLS_RE.sub("", title)
    title = _TRAILING_SYMBOLS_RE.sub("", title.strip())
    title = _TRAILING_PAREN_RE.sub("", title)
    title = _TRAILING_SYMBOLS_RE.sub("", title.strip())
    title = _AMPERSAND_RE.sub(" and ", title)
    return _SPACES_RE.sub(" ", title).strip().lower()


# Exact contract titles; trusted on any kind of header line
CANONICAL_TITLES: dict[str, SectionId] = {}
for _section_id in SectionId:
    CANONICAL_TITLES[normalize_title(PROMPT_TITLES[_section_id])] = _section_id
    CANONICAL_TITLES[normalize_title(DISPLAY_TITLES[_section_id])] = _section_id

# Looser wording; only trusted on markdown headings, since short words like
# "Accommodation" also show up as list items inside a cost breakdown
TITLE_ALIASES: dict[str, SectionId] = {
    "travel options": SectionId.TRAVEL_OPTIONS,
    "travel options flights and trains": SectionId.TRAVEL_OPTIONS,
    "flights and trains": SectionId.TRAVEL_OPTIONS,
    "getting there": SectionId.TRAVEL_OPTIONS,
    "accommodation": SectionId.ACCOMMODATION,
    "accommodations": SectionId.ACCOMMODATION,
    "accommodation options": SectionId.ACCOMMODATION,
    "where to stay": SectionId.ACCOMMODATION,
    "itinerary": SectionId.ITINERARY,
    "day by day itinerary": SectionId.ITINERARY,
    "day-by-day itinerary": SectionId.ITINERARY,
    "suggested itinerary": SectionId.ITINERARY,
    "dining": SectionId.DINING,
    "dining options": SectionId.DINING,
    "food and dining": SectionId.DINING,
    "where to eat": SectionId.DINING,
    "transportation": SectionId.TRANSPORTATION,
    "local transportation": SectionId.TRANSPORTATION,
    "transportation tips": SectionId.TRANSPORTATION,
    "getting around": SectionId.TRANSPORTATION,
    "cost breakdown": SectionId.COST_BREAKDOWN,
    "estimated costs": SectionId.COST_BREAKDOWN,
    "estimated cost": SectionId.COST_BREAKDOWN,
    "budget breakdown": SectionId.COST_BREAKDOWN,
}


@dataclass
class _Header:
    """A line recognised as the start of a chunk."""
    line_index: int
    title: str
    section_id: Optional[SectionId]
    inline_text: str = ""


@dataclass
class ParseResult:
    """Parsed sections plus a record of what had to be degraded."""
    sections: TravelPlanSections
    matched: list[SectionId] = field(default_factory=list)
    missing: list[SectionId] = field(default_factory=list)
    dropped_titles: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return bool(self.missing or self.dropped_titles)


class SectionParser:
    """Parses a markdown travel plan into TravelPlanSections."""

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST):
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)

    def parse(self, markdown: Any) -> TravelPlanSections:
        """Parse a response. Never raises; unmatched sections hold placeholders."""
        return self.parse_detailed(markdown).sections

    def parse_detailed(self, markdown: Any) -> ParseResult:
        """
        Parse a response and report degradation.

        Args:
            markdown: Raw model output; None or non-text is treated as text

        Returns:
            ParseResult with all six sections populated
        """
        text = "" if markdown is None else str(markdown)
        lines = text.splitlines()
        headers = self._find_headers(lines)

        bodies: dict[SectionId, str] = {}
        dropped: list[str] = []

        for position, header in enumerate(headers):
            end = headers[position + 1].line_index if position + 1 < len(headers) else len(lines)
            if header.section_id is None:
                dropped.append(header.title)
                logger.debug(f"Dropping unrecognised section: {header.title!r}")
                continue

            body_lines = lines[header.line_index + 1:end]
            if header.inline_text:
                body_lines = [header.inline_text] + body_lines
            body = "\n".join(body_lines).strip()
            if not body:
                continue

            if header.section_id in bodies and self.duplicate_policy == DuplicatePolicy.FIRST:
                logger.debug(f"Ignoring repeated section {header.section_id.value}")
                continue
            bodies[header.section_id] = body

        result = ParseResult(
            sections=TravelPlanSections.from_mapping(bodies),
            matched=[section_id for section_id in SectionId if section_id in bodies],
            missing=[section_id for section_id in SectionId if section_id not in bodies],
            dropped_titles=dropped,
        )
        if result.degraded:
            logger.info(
                f"Plan response degraded: missing={[s.value for s in result.missing]} "
                f"dropped={result.dropped_titles}"
            )
        return result

    def _find_headers(self, lines: list[str]) -> list[_Header]:
        """Locate chunk boundaries; text before the first one is preamble."""
        headers: list[_Header] = []
        section_level: Optional[int] = None
        in_fence = False

        for index, line in enumerate(lines):
            stripped = line.strip()
            if _FENCE_RE.match(stripped):
                in_fence = not in_fence
                continue
            if in_fence or not stripped:
                continue

            level = 0
            rest = stripped
            heading = _HEADING_RE.match(stripped)
            if heading:
                level = len(heading.group(1))
                rest = heading.group(2)

            unwrapped = rest.lstrip("*_ ")
            number = _NUMBER_RE.match(unwrapped)
            title = number.group(2) if number else rest
            emphasized = not number and rest[:1] in ("*", "_") and rest.rstrip(":").endswith(rest[:1])

            if not (level or number or emphasized):
                continue

            # Aliases only count on headings no deeper than the sections seen so far
            allow_aliases = bool(level) and (section_level is None or level <= section_level)
            section_id, inline_text = self._lookup(title, allow_aliases)

            if section_id is not None:
                if level:
                    section_level = level if section_level is None else min(section_level, level)
                headers.append(_Header(index, title.strip(), section_id, inline_text))
            elif level and number and (section_level is None or level <= section_level):
                # Top-level numbered heading with an unknown title
                headers.append(_Header(index, title.strip(), None))

        return headers

    def _lookup(self, title: str, allow_aliases: bool) -> tuple[Optional[SectionId], str]:
        """Match a header title, also trying 'Title: inline text' forms."""
        section_id = self._match(normalize_title(title), allow_aliases)
        if section_id is not None:
            return section_id, ""

        if ":" in title:
            head, tail = title.split(":", 1)
            section_id = self._match(normalize_title(head), allow_aliases)
            if section_id is not None:
                return section_id, tail.strip().lstrip("*_ ").strip()

        return None, ""

    @staticmethod
    def _match(key: str, allow_aliases: bool) -> Optional[SectionId]:
        if key in CANONICAL_TITLES:
            return CANONICAL_TITLES[key]
        if allow_aliases:
            return TITLE_ALIASES.get(key)
        return None
