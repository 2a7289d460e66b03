"""NLP Structure: rooted ordered trees, PropBank arguments, sentence encoders.

WHY: Linguistic annotation (dependency trees, named entities, semantic
roles) needs one well-typed in-memory representation that every reader
and writer agrees on. Trees must stay consistent under arbitrary edits,
and serialized output must be byte-for-byte predictable.

HOW: Three layers. A generic mutable tree (core.tree), the token-level
payload and sentence container built on it (core.node, core.sentence),
and pluggable document formatters (formatters) that emit the sparse JSON
form or the columnar CoNLL form. PropBank argument notation lives beside
them in core.argument.

RULES:
- Tree links (parent, children, siblings) are only changed through
  TreeNode mutators; never assign them directly
- Encoding logic is format-specific and lives in core.encoding
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
