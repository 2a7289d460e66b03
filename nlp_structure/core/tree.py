"""Generic rooted ordered tree with cached sibling links.

WHY: Dependency and constituency structures are both ordered trees over
a token sequence. Parsers and annotators mutate them heavily (re-attach
a dependent, splice out an empty constituent), and every query after a
mutation must see a consistent tree. Keeping the parent pointer and the
left/right sibling links as a cache of each parent's child list makes
sibling walks O(1) per step without rescanning the parent.

HOW: TreeNode owns an ordered child list. Every mutator goes through
the same two primitives: _link_siblings() re-stitches the neighbours
around an insertion or removal point, and _isolate() clears the
back-links of a node leaving the tree. Subclasses plug in payload
fields and may override _default_index() to choose where add_child()
inserts when no index is given.

RULES:
- n in parent.children  <=>  n.parent is parent
- Consecutive children a, b: a.right_sibling is b and b.left_sibling is a;
  first child has no left sibling, last child has no right sibling
- A node has at most one parent; adding it elsewhere moves it
- A node can never become its own ancestor (TreeCycleError)
- Adding a node that is already a child is a no-op returning False
- Out-of-range index queries return None or an empty list, never raise
- Not thread-safe: single writer, any number of readers when idle
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import List, Optional, Set, TypeVar, Union

logger = logging.getLogger(__name__)

N = TypeVar("N", bound="TreeNode")

Matcher = Callable[[N], bool]
Getter = Callable[[N], Optional[N]]


class TreeCycleError(ValueError):
    """Raised when a mutation would make a node its own ancestor.

    WHY: Re-parenting a node under one of its own descendants silently
    detaches the whole subtree from the root and creates a loop that
    every upward walk would spin on forever.

    HOW: Raised by add_child/set_child (and set_parent through them)
    after an upward walk from the receiving node finds the incoming one.

    RULES:
    - Raised before any link is changed; the tree is left untouched
    """


class TreeNode:
    """A node of a mutable rooted ordered tree.

    Subclasses carry the payload; this class only manages structure.
    Equality is identity, so nodes can be stored in sets and used as
    dict keys regardless of their payload.
    """

    def __init__(self) -> None:
        self._parent: Optional[TreeNode] = None
        self._left_sibling: Optional[TreeNode] = None
        self._right_sibling: Optional[TreeNode] = None
        self._children: List[TreeNode] = []

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _default_index(self: N, children: List[N], node: N) -> int:
        """Index used by add_child() when none is given (append)."""
        return len(children)

    def child_index(self: N, node: N) -> int:
        """Return the position of *node* among the children, or -1."""
        for i, child in enumerate(self._children):
            if child is node:
                return i
        return -1

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    @property
    def children(self: N) -> List[N]:
        """A copy of the child list, in order."""
        return list(self._children)

    @property
    def child_count(self) -> int:
        return len(self._children)

    def child(self: N, index: int) -> Optional[N]:
        """Return the index'th child, or None if out of range."""
        if 0 <= index < len(self._children):
            return self._children[index]
        return None

    def first_child(self: N, matcher: Optional[Matcher] = None, order: int = 0) -> Optional[N]:
        """Return the order'th child from the left, optionally among matches only.

        ``first_child()`` is the leftmost child, ``first_child(order=1)``
        the second, ``first_child(is_noun)`` the leftmost noun.
        """
        if order < 0:
            return None
        if matcher is None:
            return self.child(order)
        for child in self._children:
            if matcher(child):
                if order == 0:
                    return child
                order -= 1
        return None

    def last_child(self: N, matcher: Optional[Matcher] = None, order: int = 0) -> Optional[N]:
        """Return the order'th child from the right, optionally among matches only."""
        if order < 0:
            return None
        if matcher is None:
            return self.child(len(self._children) - order - 1)
        for child in reversed(self._children):
            if matcher(child):
                if order == 0:
                    return child
                order -= 1
        return None

    def children_range(self: N, begin: int, end: Optional[int] = None) -> List[N]:
        """Children in [begin, end); *end* defaults to the child count."""
        if end is None:
            end = len(self._children)
        if begin < 0 or end < begin:
            return []
        return self._children[begin:end]

    def children_matching(self: N, matcher: Matcher) -> List[N]:
        return [child for child in self._children if matcher(child)]

    def has_child(self) -> bool:
        return bool(self._children)

    def contains_child(self, matcher: Matcher) -> bool:
        return any(matcher(child) for child in self._children)

    def is_child_of(self, node: Optional[TreeNode]) -> bool:
        return node is not None and self._parent is node

    def add_child(self: N, node: N, index: Optional[int] = None) -> bool:
        """Insert *node* as a child, moving it away from any previous parent.

        Args:
            node: The node to attach.
            index: Insertion point; defaults to _default_index().

        Returns:
            True if the node was inserted. False if it already is a child
            of this node or *index* is outside [0, child_count].

        Raises:
            TreeCycleError: If *node* is this node or one of its ancestors.
        """
        if self.is_parent_of(node):
            logger.debug("add_child ignored: node is already a child")
            return False
        self._check_cycle(node)
        if index is None:
            index = self._default_index(self._children, node)
        if not 0 <= index <= len(self._children):
            logger.debug("add_child ignored: index %d out of range", index)
            return False

        if node._parent is not None:
            node._parent.remove_child(node)

        node._parent = self
        self._children.insert(index, node)
        self._link_siblings(self.child(index - 1), node)
        self._link_siblings(node, self.child(index + 1))
        return True

    def set_child(self: N, index: int, node: N) -> Optional[N]:
        """Put *node* at *index*, replacing and isolating the previous occupant.

        Returns:
            The replaced child, or None if *node* already is a child of
            this node or *index* is out of range.

        Raises:
            TreeCycleError: If *node* is this node or one of its ancestors.
        """
        if self.is_parent_of(node) or not 0 <= index < len(self._children):
            logger.debug("set_child ignored at index %d", index)
            return None
        self._check_cycle(node)

        if node._parent is not None:
            node._parent.remove_child(node)

        node._parent = self
        old = self._children[index]
        self._children[index] = node
        self._link_siblings(self.child(index - 1), node)
        self._link_siblings(node, self.child(index + 1))
        old._isolate()
        return old

    def remove_child(self: N, node: Union[N, int]) -> Optional[N]:
        """Detach a child given either the node itself or its index.

        Returns:
            The removed (now isolated) child, or None if there was none.
        """
        index = node if isinstance(node, int) else self.child_index(node)
        if not 0 <= index < len(self._children):
            return None

        self._link_siblings(self.child(index - 1), self.child(index + 1))
        removed = self._children.pop(index)
        removed._isolate()
        return removed

    def replace_child(self: N, old_child: N, new_child: N) -> bool:
        """Swap *old_child* for *new_child* at the same position.

        Returns:
            False (no-op) if *old_child* is not a child of this node or
            *new_child* already is one; True otherwise.
        """
        index = self.child_index(old_child)
        if index < 0 or self.is_parent_of(new_child):
            return False
        self._check_cycle(new_child)

        if new_child._parent is not None:
            new_child._parent.remove_child(new_child)

        self.set_child(index, new_child)
        return True

    def remove_self(self) -> None:
        """Detach this node, then prune every ancestor left without children.

        Walks upward: each parent that loses its last child is itself
        removed from its own parent. Stops at the first ancestor that
        still has another child, or at the root.
        """
        node: TreeNode = self
        while node._parent is not None:
            parent = node._parent
            parent.remove_child(node)
            if parent.has_child():
                break
            node = parent

    def adapt_dependents(self: N, source: N) -> None:
        """Move every child of *source* under this node, keeping their order."""
        for child in list(source._children):
            child.set_parent(self)

    # ------------------------------------------------------------------
    # Descendants
    # ------------------------------------------------------------------

    @property
    def grandchildren(self: N) -> List[N]:
        return [g for child in self._children for g in child._children]

    def descendants(self: N, depth: Optional[int] = None) -> List[N]:
        """All nodes below this one.

        Unbounded listings are depth-first pre-order. A bounded listing
        puts all children of a node before the nodes below them, so
        ``descendants(2)`` on a->(b->b1, c->c1) is [b, c, b1, c1].

        Args:
            depth: 1 = children only, 2 = children and grandchildren, etc.
                   None means unbounded; 0 or less yields an empty list.
        """
        if depth is None:
            return [node for node in self.flatten() if node is not self]
        result: List[N] = []
        if depth > 0:
            self._collect_descendants(depth, result)
        return result

    def _collect_descendants(self: N, depth: int, result: List[N]) -> None:
        result.extend(self._children)
        if depth > 1:
            for child in self._children:
                child._collect_descendants(depth - 1, result)

    def first_descendant(self: N, matcher: Matcher) -> Optional[N]:
        """First node below this one (pre-order, depth-first) matching *matcher*."""
        for child in self._children:
            if matcher(child):
                return child
            found = child.first_descendant(matcher)
            if found is not None:
                return found
        return None

    def first_lowest_chained_descendant(self: N, matcher: Matcher) -> Optional[N]:
        """Follow the first matching child repeatedly; return the deepest one reached."""
        node = self.first_child(matcher)
        descendant = None
        while node is not None:
            descendant = node
            node = node.first_child(matcher)
        return descendant

    def single_chained(self: N, matcher: Matcher) -> Optional[N]:
        """First node matching *matcher* on the single-child chain starting at self.

        The walk descends only while the current node has exactly one
        child, so branching stops the search.
        """
        node: Optional[N] = self
        while node is not None:
            if matcher(node):
                return node
            node = node.child(0) if len(node._children) == 1 else None
        return None

    def lowest_single_chained_descendant(self: N, matcher: Matcher) -> Optional[N]:
        """Deepest node reached by descending through only children that match.

        Each step goes to the sole child of the current node, and only
        while that child matches. Returns None if the first step fails.
        """
        node: N = self
        descendant = None
        while len(node._children) == 1 and matcher(node._children[0]):
            node = node._children[0]
            descendant = node
        return descendant

    def is_descendant_of(self, node: Optional[TreeNode]) -> bool:
        return self.nearest_node(lambda n: n is node, _parent_of) is not None

    def flatten(self: N) -> Iterator[N]:
        """Lazily yield this node and all descendants in depth-first pre-order.

        Each call re-walks the live tree.
        """
        yield self
        for child in list(self._children):
            yield from child.flatten()

    # ------------------------------------------------------------------
    # Ancestors
    # ------------------------------------------------------------------

    @property
    def parent(self: N) -> Optional[N]:
        return self._parent

    @property
    def grandparent(self: N) -> Optional[N]:
        return self.ancestor(2)

    def ancestor(self: N, height: int) -> Optional[N]:
        """The height'th ancestor (1: parent, 2: grandparent, ...)."""
        if height < 0:
            return None
        return self.node_at(height, _parent_of)

    def find_ancestor(self: N, matcher: Matcher) -> Optional[N]:
        """Nearest ancestor matching *matcher*."""
        return self.nearest_node(matcher, _parent_of)

    def highest_chained_ancestor(self: N, matcher: Matcher) -> Optional[N]:
        """Highest ancestor such that it and every node between it and self match.

        Stops at the first non-matching ancestor and returns the last
        matching one (or None if the parent itself does not match).
        """
        node = self._parent
        ancestor = None
        while node is not None and matcher(node):
            ancestor = node
            node = node._parent
        return ancestor

    def ancestor_set(self: N) -> Set[N]:
        ancestors: Set[N] = set()
        node = self._parent
        while node is not None:
            ancestors.add(node)
            node = node._parent
        return ancestors

    def lowest_common_ancestor(self: N, node: Optional[N]) -> Optional[N]:
        """Lowest node that is an ancestor-or-self of both this node and *node*."""
        candidates = self.ancestor_set()
        candidates.add(self)
        while node is not None:
            if node in candidates:
                return node
            node = node._parent
        return None

    def set_parent(self: N, node: Optional[N]) -> None:
        """Attach this node under *node*, or detach it when *node* is None."""
        if node is None:
            if self._parent is not None:
                self._parent.remove_child(self)
        else:
            node.add_child(self)

    def is_parent_of(self, node: Optional[TreeNode]) -> bool:
        return node is not None and node.is_child_of(self)

    def is_ancestor_of(self, node: TreeNode) -> bool:
        return node.is_descendant_of(self)

    def has_parent(self, matcher: Optional[Matcher] = None) -> bool:
        if self._parent is None:
            return False
        return matcher is None or matcher(self._parent)

    def has_grandparent(self) -> bool:
        return self.grandparent is not None

    def distance_to_top(self) -> int:
        """Number of parent links between this node and the root."""
        distance = 0
        node = self._parent
        while node is not None:
            distance += 1
            node = node._parent
        return distance

    # ------------------------------------------------------------------
    # Siblings
    # ------------------------------------------------------------------

    @property
    def left_sibling(self: N) -> Optional[N]:
        return self._left_sibling

    @property
    def right_sibling(self: N) -> Optional[N]:
        return self._right_sibling

    @property
    def siblings(self: N) -> List[N]:
        """All other children of the parent, in order."""
        if self._parent is None:
            return []
        return [n for n in self._parent._children if n is not self]

    def left_sibling_at(self: N, order: int = 0) -> Optional[N]:
        """The order'th nearest left sibling (0: immediate)."""
        if order < 0:
            return None
        return self.node_at(order + 1, _left_of)

    def right_sibling_at(self: N, order: int = 0) -> Optional[N]:
        """The order'th nearest right sibling (0: immediate)."""
        if order < 0:
            return None
        return self.node_at(order + 1, _right_of)

    def find_left_sibling(self: N, matcher: Matcher) -> Optional[N]:
        return self.nearest_node(matcher, _left_of)

    def find_right_sibling(self: N, matcher: Matcher) -> Optional[N]:
        return self.nearest_node(matcher, _right_of)

    def has_left_sibling(self, matcher: Optional[Matcher] = None) -> bool:
        if matcher is None:
            return self._left_sibling is not None
        return self.find_left_sibling(matcher) is not None

    def has_right_sibling(self, matcher: Optional[Matcher] = None) -> bool:
        if matcher is None:
            return self._right_sibling is not None
        return self.find_right_sibling(matcher) is not None

    def is_sibling_of(self, node: TreeNode) -> bool:
        return node is not self and node.is_child_of(self._parent)

    def is_left_sibling_of(self, node: Optional[TreeNode]) -> bool:
        """True if this node is somewhere to the left of *node* under the same parent."""
        if node is None or self._parent is None or self._parent is not node._parent:
            return False
        return self.nearest_node(lambda n: n is node, _right_of) is not None

    def is_right_sibling_of(self, node: TreeNode) -> bool:
        return node.is_left_sibling_of(self)

    # ------------------------------------------------------------------
    # Walkers
    # ------------------------------------------------------------------

    def node_at(self: N, order: int, getter: Getter) -> Optional[N]:
        """Apply *getter* *order* times starting from self (0 returns self)."""
        node: Optional[N] = self
        for _ in range(order):
            if node is None:
                return None
            node = getter(node)
        return node

    def nearest_node(self: N, matcher: Matcher, getter: Getter) -> Optional[N]:
        """First node reached by repeatedly applying *getter* that matches."""
        node = getter(self)
        while node is not None:
            if matcher(node):
                return node
            node = getter(node)
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_cycle(self, node: TreeNode) -> None:
        if node is self or self.is_descendant_of(node):
            raise TreeCycleError("cannot attach a node under itself or its descendant")

    def _isolate(self) -> None:
        """Clear the parent and sibling links (children are kept)."""
        self._parent = None
        self._left_sibling = None
        self._right_sibling = None

    @staticmethod
    def _link_siblings(left: Optional[TreeNode], right: Optional[TreeNode]) -> None:
        if left is not None:
            left._right_sibling = right
        if right is not None:
            right._left_sibling = left


def _parent_of(node: TreeNode) -> Optional[TreeNode]:
    return node._parent


def _left_of(node: TreeNode) -> Optional[TreeNode]:
    return node._left_sibling


def _right_of(node: TreeNode) -> Optional[TreeNode]:
    return node._right_sibling
