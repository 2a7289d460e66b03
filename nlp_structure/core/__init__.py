"""Core data model: tree, tokens, sentences, PropBank arguments, encoders.

WHY: The core package holds the structures every reader and writer
shares. They must stay consistent under mutation and encode the same way
every time, so nothing here knows about files or formatters.

HOW: tree.py defines the generic node, node.py the token payload on top
of it, sentence.py the container, encoding.py the two output views,
argument.py and location.py the PropBank notation.

RULES:
- No I/O in this package
- Formatter-specific wrapping (schemas, file suffixes) lives in formatters/
"""

from nlp_structure.core.argument import Argument, ArgumentFormatError
from nlp_structure.core.chunk import Chunk
from nlp_structure.core.featmap import FeatMap
from nlp_structure.core.location import Location
from nlp_structure.core.node import Arc, NLPNode
from nlp_structure.core.sentence import ChunkOverlapError, Sentence
from nlp_structure.core.tree import TreeCycleError, TreeNode

__all__ = [
    "Arc",
    "Argument",
    "ArgumentFormatError",
    "Chunk",
    "ChunkOverlapError",
    "FeatMap",
    "Location",
    "NLPNode",
    "Sentence",
    "TreeCycleError",
    "TreeNode",
]
