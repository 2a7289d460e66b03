"""Shared test fixtures for the nlp_structure test suite.

WHY: Several test modules need the same annotated sentence: a short
dependency tree with lemmas, tags, offsets, a named entity, a secondary
arc, and a semantic tag. Centralizing it here keeps every module testing
against the same data.

HOW: Pytest fixtures build fresh objects per test, so mutations in one
test never leak into another.

RULES:
- "Jinho Choi teaches at Emory ." is the fully annotated sample
- Heads: Choi <- teaches (root), Jinho <- Choi, at <- teaches,
  Emory <- at, "." <- teaches
- Chunks: PERSON over tokens 0..1, ORG over token 4
"""

from typing import List

import pytest

from nlp_structure.core.chunk import Chunk
from nlp_structure.core.node import NLPNode
from nlp_structure.core.sentence import Sentence

SAMPLE_TOKENS: List[str] = ["Jinho", "Choi", "teaches", "at", "Emory", "."]
SAMPLE_LEMMAS: List[str] = ["jinho", "choi", "teach", "at", "emory", "."]
SAMPLE_TAGS: List[str] = ["NNP", "NNP", "VBZ", "IN", "NNP", "."]
SAMPLE_OFFSETS: List[List[int]] = [[0, 5], [6, 10], [11, 18], [19, 21], [22, 27], [28, 29]]


@pytest.fixture
def plain_sentence():
    """Three bare tokens, no annotation layers."""
    return Sentence(["The", "dog", "ran"], sid=0)


@pytest.fixture
def annotated_sentence():
    """The fully annotated sample sentence (sid 7)."""
    nodes = []
    for i, token in enumerate(SAMPLE_TOKENS):
        begin, end = SAMPLE_OFFSETS[i]
        nodes.append(NLPNode(
            token_id=i,
            token=token,
            lemma=SAMPLE_LEMMAS[i],
            pos_tag=SAMPLE_TAGS[i],
            begin_offset=begin,
            end_offset=end,
        ))

    sentence = Sentence(nodes, sid=7)
    jinho, choi, teaches, at, emory, period = nodes

    teaches.set_dependency(sentence.root, "root")
    choi.set_dependency(teaches, "nsbj")
    jinho.set_dependency(choi, "com")
    at.set_dependency(teaches, "ppmod")
    emory.set_dependency(at, "pobj")
    period.set_dependency(teaches, "p")

    emory.add_secondary_parent(teaches, "loc")
    teaches.put_feat("sem", "ACT")

    sentence.add_chunk(Chunk(label="PERSON", begin=0, end=1))
    sentence.add_chunk(Chunk(label="ORG", begin=4, end=4))
    return sentence
