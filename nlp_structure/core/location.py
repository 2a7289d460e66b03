"""PropBank location: a (terminal, height) reference tagged with an operator.

WHY: A PropBank argument points at tree nodes indirectly, by the ID of
a terminal and how many levels to climb from it. Arguments only need a
small contract from a location: parse it from a token, test it against a
(terminal, height) pair, order it by position, and read or change its
operator tag.

HOW: Location is a mutable dataclass. The token grammar is
``<terminal>[:<height>]``; a token without a height refers to the
terminal itself and keeps that shape when written back.

RULES:
- Ordering is by (terminal_id, height); a missing height sorts as 0
- tag is one of config.ARGUMENT_OPERATORS, or "" for the primary location
- str(location) is tag + token, so an argument can be rebuilt by
  concatenating its locations
- Equality is identity: two locations at the same position are still
  distinct members of an argument
"""

from __future__ import annotations

from dataclasses import dataclass

from nlp_structure.config import LOCATION_HEIGHT_DELIM, OPERATOR_NONE


@dataclass(eq=False)
class Location:
    """A terminal/height reference inside a PropBank argument.

    Attributes:
        terminal_id: ID of the terminal the reference starts from.
        height: Levels above the terminal, or None for a bare terminal token.
        tag: Operator linking this location to the previous one
             ("*", "&", ",", ";"), or "" for the primary location.
    """

    terminal_id: int
    height: int | None = None
    tag: str = OPERATOR_NONE

    @classmethod
    def from_token(cls, token: str, tag: str = OPERATOR_NONE) -> Location:
        """Parse a ``<terminal>[:<height>]`` token.

        Raises:
            ValueError: If either part is not a non-negative integer.
        """
        terminal, delim, height = token.partition(LOCATION_HEIGHT_DELIM)
        if not terminal.isdigit() or (delim and not height.isdigit()):
            raise ValueError("Invalid location token: {!r}".format(token))
        return cls(
            terminal_id=int(terminal),
            height=int(height) if delim else None,
            tag=tag,
        )

    @property
    def sort_key(self) -> tuple[int, int]:
        return self.terminal_id, self.height or 0

    def matches(self, terminal_id: int, height: int) -> bool:
        return self.sort_key == (terminal_id, height)

    def is_tag(self, tag: str) -> bool:
        return self.tag == tag

    def __lt__(self, other: Location) -> bool:
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        if self.height is None:
            return "{}{}".format(self.tag, self.terminal_id)
        return "{}{}{}{}".format(self.tag, self.terminal_id, LOCATION_HEIGHT_DELIM, self.height)
