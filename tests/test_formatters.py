"""Unit tests for the sentence encoders and the document formatters.

WHY: The sparse JSON and CoNLL views are what other tools actually read.
A missing layer, a field emitted out of order, or a misplaced BILOU tag
produces files that load without error and mean something else.

HOW: Tests validate:
  - Sparse dict: field presence rules, ordering, relation layers
  - CoNLL rows: 8 node columns, BILOU chunk tags, "O" padding
  - Formatters: schema validation, suffixes, media types, layout

RULES:
- Schema validation uses the bundled schemas/sentence.schema.json
- Annotated data comes from the annotated_sentence fixture in conftest.py
"""

import json
import logging

import jsonschema
import pytest

from nlp_structure.config import CONLL_WIDTH, SPARSE_FIELD_ORDER
from nlp_structure.core.chunk import Chunk
from nlp_structure.core.encoding import to_conll, to_conll_rows, to_sparse_dict
from nlp_structure.core.node import NLPNode
from nlp_structure.core.sentence import Sentence
from nlp_structure.formatters import FORMATTERS
from nlp_structure.formatters.conll import ConllFormatter
from nlp_structure.formatters.sparse_json import (
    SparseJSONFormatter,
    encode_document,
    get_schema,
)


# ---------------------------------------------------------------------------
# Sparse dict
# ---------------------------------------------------------------------------


class TestSparseDict:
    """Layer presence and content of the sparse encoding."""

    def test_tokens_only(self):
        sentence = Sentence(["I", "am", "a", "boy"], sid=0)
        assert to_sparse_dict(sentence) == {"sid": 0, "tok": ["I", "am", "a", "boy"]}

    def test_empty_sentence_keeps_sid_and_tok(self):
        assert to_sparse_dict(Sentence(sid=4)) == {"sid": 4, "tok": []}

    def test_annotated_layers(self, annotated_sentence):
        data = to_sparse_dict(annotated_sentence)
        assert data["sid"] == 7
        assert data["off"][2] == [11, 18]
        assert data["lem"] == ["jinho", "choi", "teach", "at", "emory", "."]
        assert data["pos"][4] == "NNP"
        assert data["ner"] == [[0, 2, "PERSON"], [4, 5, "ORG"]]
        assert data["dep"] == [
            [1, "com"], [2, "nsbj"], [-1, "root"], [2, "ppmod"], [3, "pobj"], [2, "p"],
        ]
        assert data["dep2"] == [[4, 2, "loc"]]
        assert data["sem"] == [[2, "ACT"]]

    def test_field_order(self, annotated_sentence):
        keys = list(to_sparse_dict(annotated_sentence))
        assert keys == [k for k in SPARSE_FIELD_ORDER if k in keys]
        assert keys[:2] == ["sid", "tok"]

    def test_presence_decided_by_first_node(self, plain_sentence):
        plain_sentence[1].lemma = "dog"
        plain_sentence[1].end_offset = 7
        data = to_sparse_dict(plain_sentence)
        assert "lem" not in data
        assert "off" not in data

        plain_sentence[0].lemma = "the"
        assert to_sparse_dict(plain_sentence)["lem"] == ["the", "dog", None]

    def test_detached_node_has_null_head(self):
        sentence = Sentence(["a", "b"], sid=0)
        sentence[0].dependency_label = "dep"
        assert to_sparse_dict(sentence)["dep"] == [[None, "dep"], [None, None]]


# ---------------------------------------------------------------------------
# CoNLL
# ---------------------------------------------------------------------------


class TestConllRows:
    """Column layout and BILOU chunk tags."""

    def test_rows_are_padded_to_width(self, plain_sentence):
        rows = to_conll_rows(plain_sentence)
        assert all(len(row) == CONLL_WIDTH for row in rows)
        assert rows[0] == ["1", "The", "_", "_", "_", "_", "_", "_", "O"]

    def test_single_token_chunk(self):
        sentence = Sentence(["a", "b", "c", "d", "e"], sid=0)
        sentence.add_chunk(Chunk(label="X", begin=2, end=2))
        tags = [row[-1] for row in to_conll_rows(sentence)]
        assert tags == ["O", "O", "U-X", "O", "O"]

    def test_multi_token_chunk(self):
        sentence = Sentence(["a", "b", "c", "d", "e"], sid=0)
        sentence.add_chunk(Chunk(label="Y", begin=1, end=3))
        tags = [row[-1] for row in to_conll_rows(sentence)]
        assert tags == ["O", "B-Y", "I-Y", "L-Y", "O"]

    def test_annotated_rows(self, annotated_sentence):
        rows = to_conll_rows(annotated_sentence)
        assert rows[0] == ["1", "Jinho", "jinho", "NNP", "_", "2", "com", "_", "B-PERSON"]
        assert rows[1][-1] == "L-PERSON"
        assert rows[2] == ["3", "teaches", "teach", "VBZ", "sem=ACT", "0", "root", "_", "O"]
        assert rows[4] == ["5", "Emory", "emory", "NNP", "_", "4", "pobj", "3:loc", "U-ORG"]

    def test_chunk_past_end_raises(self, plain_sentence):
        plain_sentence.chunks.append(Chunk(label="X", begin=1, end=5))
        with pytest.raises(ValueError):
            to_conll_rows(plain_sentence)

    def test_text_form(self, plain_sentence):
        lines = to_conll(plain_sentence).split("\n")
        assert len(lines) == 3
        assert lines[2].split("\t") == ["3", "ran", "_", "_", "_", "_", "_", "_", "O"]


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


class TestSparseJSONFormatter:
    """Schema-validated JSON documents."""

    def test_schema_is_valid_draft7(self):
        jsonschema.Draft7Validator.check_schema(get_schema())

    def test_output_validates(self, annotated_sentence, plain_sentence):
        outputs = SparseJSONFormatter().format([plain_sentence, annotated_sentence])
        assert len(outputs) == 1
        out = outputs[0]
        assert out.suffix == "-sentences.json"
        assert out.media_type == "application/json"

        document = json.loads(out.content)
        jsonschema.validate(instance=document, schema=get_schema())
        assert [s["sid"] for s in document] == [0, 7]

    def test_compact_by_default(self, plain_sentence, monkeypatch):
        monkeypatch.delenv("NLP_STRUCTURE_JSON_INDENT", raising=False)
        content = SparseJSONFormatter().format([plain_sentence])[0].content
        assert content == '[{"sid":0,"tok":["The","dog","ran"]}]'

    def test_indent_from_environment(self, plain_sentence, monkeypatch):
        monkeypatch.setenv("NLP_STRUCTURE_JSON_INDENT", "2")
        content = SparseJSONFormatter().format([plain_sentence])[0].content
        assert content.startswith('[\n  {\n    "sid": 0')

    def test_invalid_document_raises(self):
        sentence = Sentence([NLPNode(token_id=0, token=None)], sid=0)
        with pytest.raises(jsonschema.ValidationError):
            encode_document([sentence])
        assert encode_document([sentence], validate=False) == [{"sid": 0, "tok": [None]}]

    def test_sentence_str_is_compact_json(self, plain_sentence):
        assert str(plain_sentence) == '{"sid":0,"tok":["The","dog","ran"]}'


class TestConllFormatter:
    """Blank-line separated CoNLL blocks."""

    def test_layout(self, annotated_sentence, plain_sentence):
        out = ConllFormatter().format([plain_sentence, Sentence(sid=1), annotated_sentence])[0]
        assert out.suffix == "-sentences.tsv"
        assert out.media_type == "text/tab-separated-values"
        assert out.content.endswith("\n")

        blocks = out.content.rstrip("\n").split("\n\n")
        assert len(blocks) == 2
        assert len(blocks[1].split("\n")) == 6
        assert all(len(line.split("\t")) == CONLL_WIDTH for line in out.content.split("\n") if line)

    def test_empty_sentences_are_reported(self, plain_sentence, caplog):
        with caplog.at_level(logging.INFO, logger="nlp_structure.formatters.conll"):
            ConllFormatter().format([Sentence(sid=0), plain_sentence, Sentence(sid=2)])
        assert "Formatted 3 sentences as CoNLL (2 empty skipped)" in caplog.text

    def test_empty_document(self):
        assert ConllFormatter().format([])[0].content == ""


class TestRegistry:
    """FORMATTERS lookup."""

    def test_keys(self):
        assert set(FORMATTERS) == {"json", "tsv"}

    @pytest.mark.parametrize("key", ["json", "tsv"])
    def test_instantiable(self, key, plain_sentence):
        formatter = FORMATTERS[key]()
        assert formatter.name
        assert formatter.format([plain_sentence])[0].content
