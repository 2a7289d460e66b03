"""Document writer contract and the file it produces.

WHY: The JSON and CoNLL writers differ only in how a sentence list
becomes text. Holding them to one signature lets the registry hand out
either one and lets the caller save the result without knowing which.

HOW: BaseFormatter declares a display ``name`` and ``format()``.
FormatterOutput carries the text of one file with the suffix to append
to the document stem and the MIME type to serve it with.

RULES:
- ``format()`` always returns a list, one item per written file
- ``suffix`` begins with "-" (``"-sentences.tsv"``); the stem is added
  by the caller
- Sentences passed to ``format()`` are read, never mutated
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from nlp_structure.core.sentence import Sentence


@dataclass
class FormatterOutput:
    """Text of one written file.

    Attributes:
        suffix: Appended to the document stem; ``"-sentences.tsv"`` on a
                ``news`` document gives ``news-sentences.tsv``.
        content: Serialized sentences.
        media_type: ``"application/json"`` or ``"text/tab-separated-values"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for sentence document writers.

    A new view of the same sentences is a subclass that names itself and
    turns the sentence list into FormatterOutput items; listing it in
    formatters.FORMATTERS makes it reachable by key.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'CoNLL (TSV)'."""

    @abstractmethod
    def format(self, sentences: List[Sentence]) -> List[FormatterOutput]:
        """Serialize *sentences*, in the given order, into output files."""
