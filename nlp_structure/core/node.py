"""Token-level tree node carrying linguistic annotation.

WHY: A dependency tree is a TreeNode per token plus the annotation each
token carries (form, lemma, tags, offsets, relations). Encoders read
these fields; annotators write them. Keeping them on the node means a
re-attachment in the tree and the label describing it never drift apart.

HOW: NLPNode is a dataclass subclass of TreeNode. The dataclass fields
are the payload; tree links come from TreeNode.__init__, called in
__post_init__. Primary dependencies use the tree itself (parent +
dependency_label); secondary dependencies are Arc objects pointing at
other nodes, outside the tree.

RULES:
- token_id is the 0-based position in the sentence; the root is ROOT_ID
- Children are inserted in token-id order unless an index is given
- Offsets are character positions; end_offset <= 0 means "no offsets"
- to_tsv() yields exactly 8 columns, 1-based IDs, head 0 for the root
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import List, Optional

from nlp_structure.config import CONLL_EMPTY, ROOT_ID, ROOT_TOKEN
from nlp_structure.core.featmap import FeatMap
from nlp_structure.core.tree import TreeNode

_DEPS_PAIR_DELIM = "|"
_DEPS_HEAD_DELIM = ":"


@dataclass(eq=False)
class Arc:
    """A labeled secondary dependency pointing at a head node."""

    node: NLPNode
    label: str


@dataclass(eq=False)
class NLPNode(TreeNode):
    """One token of a sentence, and a node of its dependency tree.

    Attributes:
        token_id: 0-based position in the sentence (ROOT_ID for the root).
        token: Surface form.
        lemma: Lemma, or None when not annotated.
        pos_tag: Part-of-speech tag, or None when not annotated.
        ner_tag: Per-token named entity tag, or None.
        begin_offset: Character offset where the token starts (-1: unknown).
        end_offset: Character offset where the token ends (-1: unknown).
        dependency_label: Label of the arc from the parent, or None.
        feat_map: Additional features; the ``sem`` key holds semantic tags.
        secondary_parents: Secondary heads as labeled arcs.
    """

    token_id: int = -1
    token: str = ""
    lemma: Optional[str] = None
    pos_tag: Optional[str] = None
    ner_tag: Optional[str] = None
    begin_offset: int = -1
    end_offset: int = -1
    dependency_label: Optional[str] = None
    feat_map: FeatMap = field(default_factory=FeatMap)
    secondary_parents: List[Arc] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        TreeNode.__init__(self)
        if not isinstance(self.feat_map, FeatMap):
            self.feat_map = FeatMap(self.feat_map)

    @classmethod
    def create_root(cls) -> NLPNode:
        return cls(
            token_id=ROOT_ID,
            token=ROOT_TOKEN,
            lemma=ROOT_TOKEN,
            pos_tag=ROOT_TOKEN,
        )

    @property
    def is_root(self) -> bool:
        return self.token_id == ROOT_ID

    def _default_index(self, children: List[NLPNode], node: NLPNode) -> int:
        return bisect.bisect_right([child.token_id for child in children], node.token_id)

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    def feat(self, key: str) -> Optional[str]:
        return self.feat_map.get(key)

    def put_feat(self, key: str, value: str) -> Optional[str]:
        previous = self.feat_map.get(key)
        self.feat_map[key] = value
        return previous

    def remove_feat(self, key: str) -> Optional[str]:
        return self.feat_map.pop(key, None)

    # ------------------------------------------------------------------
    # Dependencies
    # ------------------------------------------------------------------

    def set_dependency(self, head: Optional[NLPNode], label: Optional[str]) -> None:
        """Attach this node under *head* with *label* (None head detaches)."""
        self.set_parent(head)
        self.dependency_label = label

    def secondary_parent(self, node: NLPNode) -> Optional[Arc]:
        return next((arc for arc in self.secondary_parents if arc.node is node), None)

    def add_secondary_parent(self, node: NLPNode, label: str) -> Arc:
        """Add (or relabel) the secondary arc from *node* to this node."""
        arc = self.secondary_parent(node)
        if arc is None:
            arc = Arc(node=node, label=label)
            self.secondary_parents.append(arc)
        else:
            arc.label = label
        return arc

    def remove_secondary_parent(self, node: NLPNode) -> Optional[Arc]:
        arc = self.secondary_parent(node)
        if arc is not None:
            self.secondary_parents.remove(arc)
        return arc

    def is_secondary_child_of(self, node: NLPNode, label: Optional[str] = None) -> bool:
        arc = self.secondary_parent(node)
        return arc is not None and (label is None or arc.label == label)

    # ------------------------------------------------------------------
    # CoNLL
    # ------------------------------------------------------------------

    def to_tsv(self) -> List[str]:
        """The 8 per-token CoNLL columns: ID FORM LEMMA POS FEATS HEAD DEPREL DEPS."""
        parent = self.parent
        arcs = sorted(self.secondary_parents, key=lambda a: a.node.token_id)
        deps = _DEPS_PAIR_DELIM.join(
            "{}{}{}".format(a.node.token_id + 1, _DEPS_HEAD_DELIM, a.label) for a in arcs
        )
        return [
            str(self.token_id + 1),
            self.token,
            _or_empty(self.lemma),
            _or_empty(self.pos_tag),
            str(self.feat_map),
            str(parent.token_id + 1) if parent is not None else CONLL_EMPTY,
            _or_empty(self.dependency_label),
            deps or CONLL_EMPTY,
        ]


def _or_empty(value: Optional[str]) -> str:
    return value if value is not None else CONLL_EMPTY
