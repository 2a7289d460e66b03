"""PropBank argument: a role label over a chain of locations.

WHY: Semantic-role arguments are not always one contiguous constituent.
PropBank encodes discontinuous spans, trace chains, and co-indexed
nodes in a compact notation such as ``"3:1*5:0,7:1-ARG1"``. The rest of
the toolkit needs that notation parsed into something it can inspect,
reorder, and edit, and written back out unchanged.

HOW: The part before the first ``-`` is tokenized on the operator set
``* & , ;`` with the delimiters kept as tokens. The first token is the
primary location (empty tag); every following (operator, token) pair
becomes a location tagged with that operator. Serialization concatenates
each location's own text and appends ``-<label>``.

RULES:
- Malformed notation raises ArgumentFormatError carrying the input;
  no partially built Argument is ever returned
- sort_locations(): after it, the positionally first location is the
  only one with the empty tag; the operator it displaced moves to the
  old primary location
- remove_locations(): the new first location is reset to the empty tag
  WITHOUT moving its operator anywhere (deliberately unlike sorting)
- Ordering between arguments compares their first locations; arguments
  without locations cannot be ordered
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from typing import List, Optional, Union

from nlp_structure.config import ARGUMENT_OPERATORS, ARGUMENT_SEPARATOR, OPERATOR_NONE
from nlp_structure.core.location import Location

logger = logging.getLogger(__name__)

# Capturing group keeps the operators in the split output.
_OPERATOR_SPLIT_RE = re.compile(
    "([{}])".format("".join(re.escape(op) for op in sorted(ARGUMENT_OPERATORS)))
)


class ArgumentFormatError(ValueError):
    """Raised when a PropBank argument string cannot be parsed.

    WHY: Annotation files are hand-edited; a clear error pointing at the
    offending string is the only practical way to find the bad line.

    HOW: Raised by Argument.parse for a missing ``-`` separator, an empty
    location stream, a dangling operator, or an unparsable location token.

    RULES:
    - .text always holds the full input string
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__("Invalid argument notation: {!r}".format(text))


def _tokenize(locations: str) -> List[str]:
    return [t for t in _OPERATOR_SPLIT_RE.split(locations) if t]


class Argument:
    """A semantic-role label plus an ordered list of locations."""

    def __init__(self, label: str = "", locations: Optional[Iterable[Location]] = None) -> None:
        self.label = label
        self.locations: List[Location] = list(locations) if locations is not None else []

    @classmethod
    def parse(cls, text: str) -> Argument:
        """Build an Argument from ``<loc>(<op><loc>)*-<label>`` notation.

        Raises:
            ArgumentFormatError: If *text* is not well-formed.
        """
        head, sep, label = text.partition(ARGUMENT_SEPARATOR)
        tokens = _tokenize(head)
        if not sep or not tokens:
            logger.debug("Rejected argument notation %r", text)
            raise ArgumentFormatError(text)

        try:
            locations = [Location.from_token(tokens[0], OPERATOR_NONE)]
            rest = iter(tokens[1:])
            for operator in rest:
                token = next(rest, None)
                if token is None or operator not in ARGUMENT_OPERATORS:
                    raise ValueError("dangling operator {!r}".format(operator))
                locations.append(Location.from_token(token, operator))
        except ValueError as exc:
            logger.debug("Rejected argument notation %r: %s", text, exc)
            raise ArgumentFormatError(text) from exc

        return cls(label=label, locations=locations)

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------

    @property
    def location_count(self) -> int:
        return len(self.locations)

    def location(self, index: int) -> Optional[Location]:
        """Return the index'th location, or None if out of range."""
        if 0 <= index < len(self.locations):
            return self.locations[index]
        return None

    def find_location(self, terminal_id: int, height: int) -> Optional[Location]:
        """First location matching the terminal ID and height."""
        return next((loc for loc in self.locations if loc.matches(terminal_id, height)), None)

    def add_location(self, location: Location) -> None:
        self.locations.append(location)

    def add_locations(self, locations: Iterable[Location]) -> None:
        self.locations.extend(locations)

    def remove_locations(
        self,
        match: Union[Callable[[Location], bool], Iterable[Location]],
    ) -> None:
        """Remove locations by predicate or by membership in a collection.

        Afterwards the first remaining location gets the empty tag; the
        operator it carried is dropped, not moved.
        """
        if callable(match):
            keep = [loc for loc in self.locations if not match(loc)]
        else:
            doomed = {id(loc) for loc in match}
            keep = [loc for loc in self.locations if id(loc) not in doomed]
        self.locations = keep
        if self.locations:
            self.locations[0].tag = OPERATOR_NONE

    def remove_location(self, terminal_id: int, height: int) -> None:
        """Remove every location matching the terminal ID and height."""
        self.remove_locations(lambda loc: loc.matches(terminal_id, height))

    def sort_locations(self) -> None:
        """Sort by (terminal_id, height) and move the primary marker to the front.

        If the new first location carries an operator, the location that
        used to be primary (empty tag) takes over that operator and the
        first location becomes the primary one.
        """
        if not self.locations:
            return

        self.locations.sort()
        first = self.locations[0]
        if first.is_tag(OPERATOR_NONE):
            return

        for loc in self.locations[1:]:
            if loc.is_tag(OPERATOR_NONE):
                loc.tag = first.tag
                break
        first.tag = OPERATOR_NONE

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def contains_operator(self, operator: str) -> bool:
        return any(loc.is_tag(operator) for loc in self.locations)

    def is_label(self, label: str) -> bool:
        return self.label == label

    # ------------------------------------------------------------------
    # Ordering and text
    # ------------------------------------------------------------------

    def compare(self, other: Argument) -> int:
        """-1, 0 or 1 by the position of each argument's first location.

        Raises:
            IndexError: If either argument has no locations.
        """
        mine = self.locations[0].sort_key
        theirs = other.locations[0].sort_key
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: Argument) -> bool:
        return self.compare(other) < 0

    def __str__(self) -> str:
        return "".join(str(loc) for loc in self.locations) + ARGUMENT_SEPARATOR + self.label

    def __repr__(self) -> str:
        return "Argument({!r})".format(str(self))
