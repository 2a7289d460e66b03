"""Lookup table of the sentence document writers.

WHY: A pipeline picks its output view ("json" or "tsv") from a setting,
not from an import, so the document writers are looked up by short name.

HOW: FORMATTERS holds the formatter classes keyed by name; a caller
builds one when it needs it, e.g. ``FORMATTERS["tsv"]().format(sentences)``.

RULES:
- Keys name the file format ("json", "tsv")
- Values are BaseFormatter subclasses, instantiated by the caller
- The schema file is opened on first JSON format, not at import
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nlp_structure.formatters.conll import ConllFormatter
from nlp_structure.formatters.sparse_json import SparseJSONFormatter

if TYPE_CHECKING:
    from nlp_structure.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json": SparseJSONFormatter,
    "tsv": ConllFormatter,
}
