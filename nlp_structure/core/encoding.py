"""Sparse JSON and CoNLL encodings of a sentence.

WHY: Downstream consumers want two views of the same annotation. Web
clients and pipelines exchange the sparse JSON object, which only
carries the layers a sentence actually has. Evaluation scripts and
legacy tools read the columnar CoNLL form, one token per row, with
named entities spelled out as BILOU tags.

HOW: to_sparse_dict() walks the node sequence once per layer and adds a
field only when that layer is present. Presence of the token-aligned
layers (off, lem, pos, dep) is decided from the FIRST node alone; the
relation layers (dep2, sem) are present if any node contributes to them.
to_conll_rows() asks each node for its 8 core columns, appends chunk
tags, then pads every row still short of CONLL_WIDTH with a single "O".

RULES:
- Field order: sid, tok, off?, lem?, pos?, ner?, dep?, dep2?, sem?
- off is emitted iff node 0 has end_offset > 0
- lem / pos / dep are emitted iff node 0 has a lemma / tag / label
- ner lists every chunk as [begin, end_exclusive, label]
- dep: [head_token_id, label] per node; head is null without a parent
- dep2: [child_id, head_id, label] for every secondary arc, node order
- sem: [token_id, sem_tag] for nodes whose feat_map has "sem"
- BILOU: U- for single-token chunks; otherwise B- first, L- last,
  I- in between; rows are then padded to CONLL_WIDTH with "O"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

from nlp_structure.config import (
    BILOU_BEGIN,
    BILOU_INSIDE,
    BILOU_LAST,
    BILOU_OUTSIDE,
    BILOU_UNIT,
    CONLL_COLUMN_SEPARATOR,
    CONLL_ROW_SEPARATOR,
    CONLL_WIDTH,
    DEP,
    DEP2,
    LEM,
    NER,
    OFF,
    POS,
    SEM,
    SID,
    TOK,
)

if TYPE_CHECKING:
    from nlp_structure.core.chunk import Chunk
    from nlp_structure.core.node import NLPNode
    from nlp_structure.core.sentence import Sentence


def to_sparse_dict(sentence: Sentence) -> Dict[str, Any]:
    """Encode *sentence* as the sparse JSON-ready dict.

    Args:
        sentence: The sentence to encode.

    Returns:
        A dict whose keys follow config.SPARSE_FIELD_ORDER, containing
        only the layers present in the sentence.
    """
    nodes = sentence.nodes
    data: Dict[str, Any] = {
        SID: sentence.sid,
        TOK: [node.token for node in nodes],
    }
    if not nodes:
        return data

    first = nodes[0]
    if first.end_offset > 0:
        data[OFF] = [[node.begin_offset, node.end_offset] for node in nodes]
    if first.lemma is not None:
        data[LEM] = [node.lemma for node in nodes]
    if first.pos_tag is not None:
        data[POS] = [node.pos_tag for node in nodes]
    if sentence.chunks:
        data[NER] = [chunk.to_list() for chunk in sentence.chunks]
    if first.dependency_label is not None:
        data[DEP] = [_primary_dependency(node) for node in nodes]

    secondary = [
        [node.token_id, arc.node.token_id, arc.label]
        for node in nodes
        for arc in node.secondary_parents
    ]
    if secondary:
        data[DEP2] = secondary

    semantic = [
        [node.token_id, node.feat(SEM)]
        for node in nodes
        if node.feat(SEM) is not None
    ]
    if semantic:
        data[SEM] = semantic

    return data


def _primary_dependency(node: NLPNode) -> List[Any]:
    parent = node.parent
    return [parent.token_id if parent is not None else None, node.dependency_label]


def to_conll_rows(sentence: Sentence) -> List[List[str]]:
    """Per-token CoNLL rows: the node's 8 core columns plus a chunk tag."""
    rows = [node.to_tsv() for node in sentence.nodes]
    _append_chunk_tags(rows, sentence.chunks)

    for row in rows:
        if len(row) < CONLL_WIDTH:
            row.append(BILOU_OUTSIDE)

    return rows


def _append_chunk_tags(rows: List[List[str]], chunks: List[Chunk]) -> None:
    for chunk in chunks:
        if chunk.end >= len(rows):
            raise ValueError(
                "Chunk {!r} ends past the last token (index {})".format(chunk, len(rows) - 1)
            )
        if chunk.begin == chunk.end:
            rows[chunk.begin].append(BILOU_UNIT + chunk.label)
            continue

        rows[chunk.begin].append(BILOU_BEGIN + chunk.label)
        rows[chunk.end].append(BILOU_LAST + chunk.label)
        for i in range(chunk.begin + 1, chunk.end):
            rows[i].append(BILOU_INSIDE + chunk.label)


def to_conll(sentence: Sentence) -> str:
    """Tab-separated columns, newline-separated rows, no trailing newline."""
    return CONLL_ROW_SEPARATOR.join(
        CONLL_COLUMN_SEPARATOR.join(row) for row in to_conll_rows(sentence)
    )
