"""Sparse JSON document formatter.

WHY: Services and caches exchange annotated documents as JSON. The
sparse form keeps payloads small by carrying only the layers a sentence
actually has, which also makes malformed output easy to miss, so every
document is checked against the bundled schema before it leaves.

HOW: Each sentence is encoded with core.encoding.to_sparse_dict(); the
document is the JSON array of those objects. The array is validated with
jsonschema against schemas/sentence.schema.json, then serialized.

RULES:
- Output is one JSON array, sentences in input order
- Validation runs when config.VALIDATE_JSON is true (the default);
  jsonschema.ValidationError propagates to the caller
- Indentation follows config.json_indent() (compact when unset)
- Output suffix: "-sentences.json"
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from nlp_structure import config
from nlp_structure.core.encoding import to_sparse_dict
from nlp_structure.core.sentence import Sentence
from nlp_structure.formatters.base import BaseFormatter, FormatterOutput

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "sentence.schema.json"


def _load_schema() -> Dict[str, Any]:
    """Read schemas/sentence.schema.json; get_schema() keeps the result."""
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        _CACHED_SCHEMA = _load_schema()
    return _CACHED_SCHEMA


def encode_document(sentences: List[Sentence], validate: bool = True) -> List[Dict[str, Any]]:
    """Encode sentences into the sparse document array.

    Raises:
        jsonschema.ValidationError: If *validate* is set and the encoded
            document does not conform to the schema.
    """
    document = [to_sparse_dict(sentence) for sentence in sentences]
    if validate:
        jsonschema.validate(instance=document, schema=get_schema())
    return document


class SparseJSONFormatter(BaseFormatter):
    """Formatter that produces a sparse JSON document.

    WHY: The sparse form is the exchange format for services; it omits
    layers that were never annotated instead of filling them with nulls.

    HOW: Encodes every sentence, validates the array, dumps it as JSON.
    """

    @property
    def name(self) -> str:
        return "Sparse JSON"

    def format(self, sentences: List[Sentence]) -> List[FormatterOutput]:
        document = encode_document(sentences, validate=config.VALIDATE_JSON)
        indent = config.json_indent()
        content = json.dumps(
            document,
            indent=indent,
            # Compact separators only when not pretty-printing
            separators=(",", ":") if indent is None else None,
            ensure_ascii=False,
        )
        logger.info("Formatted %d sentences as sparse JSON", len(sentences))

        return [
            FormatterOutput(
                suffix="-sentences.json",
                content=content,
                media_type="application/json",
            )
        ]
