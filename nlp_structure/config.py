"""Configuration constants, field-name catalogs, and .env loading.

WHY: Field names, argument operators, and tagging prefixes are shared by
the core model, the encoders, and the formatters. Keeping them as plain
module-level data (not buried in logic) makes the wire formats easy to
audit and change in one place.

HOW: python-dotenv loads the .env file on import. Catalogs are defined as
module-level strings and frozensets. Behavioural switches are read from
the environment with safe defaults.

RULES:
- Sparse field names are the JSON keys of the sparse sentence form
- ARGUMENT_OPERATORS is the full delimiter set of the argument notation
- CONLL_WIDTH counts the per-token columns including the chunk tag
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Sparse sentence fields
# ---------------------------------------------------------------------------

SID = "sid"
"""Sentence ID."""
TOK = "tok"
"""Linguistic tokens."""
OFF = "off"
"""Character offsets of each token w.r.t. the original text."""
LEM = "lem"
"""Lemmas."""
POS = "pos"
"""Part-of-speech tags."""
NER = "ner"
"""Named entity chunks."""
DEP = "dep"
"""Primary dependencies."""
DEP2 = "dep2"
"""Secondary dependencies."""
SEM = "sem"
"""Semantic tags (also the feature key that carries them on a node)."""
REF = "ref"
"""Coreference relations (reserved, not emitted)."""
ALL = "all"
"""All components in a pipeline."""

SPARSE_FIELD_ORDER: tuple[str, ...] = (SID, TOK, OFF, LEM, POS, NER, DEP, DEP2, SEM)

# ---------------------------------------------------------------------------
# PropBank argument notation
# ---------------------------------------------------------------------------

ARGUMENT_SEPARATOR = "-"
"""Delimiter between the location stream and the label ("0*1-ARG0")."""

OPERATOR_CHAIN = "*"
OPERATOR_COINDEX = "&"
OPERATOR_CONCAT = ","
OPERATOR_LINK = ";"
OPERATOR_NONE = ""
"""Tag of the primary location of an argument."""

ARGUMENT_OPERATORS: frozenset[str] = frozenset({
    OPERATOR_CHAIN, OPERATOR_COINDEX, OPERATOR_CONCAT, OPERATOR_LINK,
})

LOCATION_HEIGHT_DELIM = ":"
"""Delimiter between terminal ID and height in a location token ("3:1")."""

# ---------------------------------------------------------------------------
# Chunk tagging (BILOU) and CoNLL layout
# ---------------------------------------------------------------------------

BILOU_BEGIN = "B-"
BILOU_INSIDE = "I-"
BILOU_LAST = "L-"
BILOU_UNIT = "U-"
BILOU_OUTSIDE = "O"

CONLL_WIDTH = 9
"""Per-token column count once the chunk tag column is filled."""

CONLL_EMPTY = "_"
CONLL_COLUMN_SEPARATOR = "\t"
CONLL_ROW_SEPARATOR = "\n"

# ---------------------------------------------------------------------------
# Synthetic root
# ---------------------------------------------------------------------------

ROOT_ID = -1
ROOT_TOKEN = "@#r$%"

# ---------------------------------------------------------------------------
# Formatter defaults
# ---------------------------------------------------------------------------

VALIDATE_JSON = os.getenv("NLP_STRUCTURE_VALIDATE_JSON", "true").lower() == "true"


def json_indent() -> int | None:
    """Return the indent for formatter JSON output.

    WHY: Compact output is the default wire form, but humans reviewing
    documents want pretty-printed JSON without touching code.

    HOW: Reads NLP_STRUCTURE_JSON_INDENT from os.environ (populated by
    python-dotenv).

    RULES:
    - Unset or empty → None (compact)
    - Non-integer values raise ValueError
    """
    raw = os.getenv("NLP_STRUCTURE_JSON_INDENT", "").strip()
    if not raw:
        return None
    return int(raw)
