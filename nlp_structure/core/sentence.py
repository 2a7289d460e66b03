"""Sentence: an ordered token sequence, its dependency tree, and its chunks.

WHY: Every reader, annotator, and writer works sentence by sentence.
The sentence owns the token nodes (in surface order), a synthetic root
that anchors the dependency tree, and the named-entity chunks, so the
encoders can produce either output view from one object.

HOW: A Sentence is built either from raw token strings (each wrapped in
a fresh NLPNode at consecutive positions) or from ready-made NLPNodes.
List-style accessors edit the token sequence. Field projections
(tokens, lemmas, pos_tags) are lazy read-only views over the live node
list. Serialization delegates to core.encoding; from_dict() reads the
sparse form back.

RULES:
- The root is not part of the node sequence; get(-1) returns it
- Construction from anything but str or NLPNode elements is a TypeError
- Chunks never overlap and always lie inside the node sequence when added
- A bare str is not a token sequence; Sentence("dog") is a TypeError
- Sentences order by sid
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Any, Dict, List, Optional, Union

from nlp_structure.config import DEP, DEP2, LEM, NER, OFF, POS, SEM, SID, TOK
from nlp_structure.core import encoding
from nlp_structure.core.chunk import Chunk
from nlp_structure.core.node import NLPNode

logger = logging.getLogger(__name__)


class ChunkOverlapError(ValueError):
    """Raised when a chunk overlaps a chunk already in the sentence.

    WHY: BILOU tagging assumes at most one chunk per token; an overlap
    would silently produce rows with two tags and a misaligned column.

    HOW: Raised by Sentence.add_chunk before the chunk is stored.
    """


class _FieldView(Sequence):
    """Lazy read-only projection of one node field."""

    def __init__(self, nodes: List[NLPNode], getter: Callable[[NLPNode], Any]) -> None:
        self._nodes = nodes
        self._getter = getter

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self._getter(node) for node in self._nodes[index]]
        return self._getter(self._nodes[index])

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return repr(list(self))


class Sentence:
    """An ordered sequence of NLPNodes plus named-entity chunks."""

    def __init__(
        self,
        nodes: Optional[Iterable[Union[str, NLPNode]]] = None,
        sid: int = -1,
    ) -> None:
        if isinstance(nodes, str):
            raise TypeError("Sentence nodes must be a sequence of str or NLPNode, got a bare str")
        self.sid = sid
        self.root = NLPNode.create_root()
        self.nodes: List[NLPNode] = _build_nodes(list(nodes) if nodes is not None else [])
        self.chunks: List[Chunk] = []

    # ------------------------------------------------------------------
    # Node sequence
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[NLPNode]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> NLPNode:
        return self.nodes[index]

    def __setitem__(self, index: int, node: NLPNode) -> None:
        self.nodes[index] = node

    def get(self, index: int) -> Optional[NLPNode]:
        """Node at *index*; the root for any negative index, None past the end."""
        if index < 0:
            return self.root
        if index < len(self.nodes):
            return self.nodes[index]
        return None

    def append(self, node: NLPNode) -> None:
        self.nodes.append(node)

    def insert(self, index: int, node: NLPNode) -> None:
        self.nodes.insert(index, node)

    def pop(self, index: int = -1) -> NLPNode:
        return self.nodes.pop(index)

    def remove(self, node: NLPNode) -> bool:
        """Remove *node* (by identity) from the sequence; False if absent."""
        for i, candidate in enumerate(self.nodes):
            if candidate is node:
                del self.nodes[i]
                return True
        return False

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    @property
    def tokens(self) -> Sequence:
        return _FieldView(self.nodes, lambda n: n.token)

    @property
    def lemmas(self) -> Sequence:
        return _FieldView(self.nodes, lambda n: n.lemma)

    @property
    def pos_tags(self) -> Sequence:
        return _FieldView(self.nodes, lambda n: n.pos_tag)

    # ------------------------------------------------------------------
    # Chunks
    # ------------------------------------------------------------------

    def add_chunk(self, chunk: Chunk) -> None:
        """Add a named-entity chunk.

        Raises:
            ValueError: If the chunk ends past the last token.
            ChunkOverlapError: If the chunk overlaps an existing chunk.
        """
        if chunk.end >= len(self.nodes):
            raise ValueError(
                "Chunk {!r} ends past the last token of a {}-token sentence".format(
                    chunk, len(self.nodes)
                )
            )
        for other in self.chunks:
            if chunk.overlaps(other):
                raise ChunkOverlapError("Chunk {!r} overlaps {!r}".format(chunk, other))
        self.chunks.append(chunk)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return encoding.to_sparse_dict(self)

    def to_tsv(self) -> str:
        return encoding.to_conll(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Sentence:
        """Rebuild a Sentence from its sparse form.

        WHY: Sparse documents come back from services and caches; the
        toolkit has to be able to edit what it previously wrote.

        HOW: Tokens become nodes; each optional layer present in *data*
        is written back onto them. Dependency heads are resolved through
        get(), so -1 attaches to the root.

        RULES:
        - Missing optional fields leave the corresponding node fields unset
        - References to unknown token ids are logged and skipped
        """
        nodes = [NLPNode(token_id=i, token=t) for i, t in enumerate(data.get(TOK, []))]
        sentence = cls(nodes, sid=data.get(SID, -1))

        for node, (begin, end) in zip(nodes, data.get(OFF, [])):
            node.begin_offset = begin
            node.end_offset = end
        for node, lemma in zip(nodes, data.get(LEM, [])):
            node.lemma = lemma
        for node, tag in zip(nodes, data.get(POS, [])):
            node.pos_tag = tag
        for item in data.get(NER, []):
            sentence.add_chunk(Chunk.from_list(item))

        for node, (head_id, label) in zip(nodes, data.get(DEP, [])):
            if head_id is None:
                node.dependency_label = label
                continue
            head = sentence._resolve(head_id)
            if head is not None:
                node.set_dependency(head, label)

        for child_id, head_id, label in data.get(DEP2, []):
            child = sentence._resolve(child_id)
            head = sentence._resolve(head_id)
            if child is not None and head is not None:
                child.add_secondary_parent(head, label)

        for token_id, tag in data.get(SEM, []):
            node = sentence._resolve(token_id)
            if node is not None:
                node.put_feat(SEM, tag)

        return sentence

    def _resolve(self, token_id: int) -> Optional[NLPNode]:
        node = self.get(token_id)
        if node is None:
            logger.warning("Sentence %s: unknown token id %s", self.sid, token_id)
        return node

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def __lt__(self, other: Sentence) -> bool:
        return self.sid < other.sid

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def __repr__(self) -> str:
        return "Sentence(sid={}, tokens={!r})".format(self.sid, list(self.tokens))


def _build_nodes(items: List[Union[str, NLPNode]]) -> List[NLPNode]:
    if all(isinstance(item, str) for item in items):
        return [NLPNode(token_id=i, token=token) for i, token in enumerate(items)]
    if all(isinstance(item, NLPNode) for item in items):
        return list(items)
    bad = next((item for item in items if not isinstance(item, (str, NLPNode))), None)
    if bad is None:
        raise TypeError("Sentence nodes must not mix str and NLPNode elements")
    raise TypeError(
        "Sentence nodes must be str or NLPNode, got {}".format(type(bad).__name__)
    )
