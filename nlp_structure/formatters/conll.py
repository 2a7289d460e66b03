"""CoNLL (tab-separated) document formatter.

WHY: Evaluation scripts and older tools read one token per line with
fixed columns. Named entities have to be folded into that layout, which
is what the BILOU chunk column does.

HOW: Each sentence is encoded with core.encoding.to_conll(); sentences
are separated by a blank line and the file ends with a newline.

RULES:
- 9 columns per token: the 8 node columns plus the BILOU chunk tag
- One blank line between sentences
- Sentences without tokens produce no block; the info log counts them
- Output suffix: "-sentences.tsv"
- Media type: "text/tab-separated-values"
"""

from __future__ import annotations

import logging
from typing import List

from nlp_structure.config import CONLL_ROW_SEPARATOR
from nlp_structure.core.encoding import to_conll
from nlp_structure.core.sentence import Sentence
from nlp_structure.formatters.base import BaseFormatter, FormatterOutput

logger = logging.getLogger(__name__)


class ConllFormatter(BaseFormatter):
    """Formatter that produces CoNLL-style TSV blocks, one per sentence."""

    @property
    def name(self) -> str:
        return "CoNLL (TSV)"

    def format(self, sentences: List[Sentence]) -> List[FormatterOutput]:
        blocks = [to_conll(sentence) for sentence in sentences if len(sentence)]
        skipped = len(sentences) - len(blocks)
        content = (CONLL_ROW_SEPARATOR * 2).join(blocks)
        if content:
            content += CONLL_ROW_SEPARATOR
        logger.info(
            "Formatted %d sentences as CoNLL (%d empty skipped)", len(sentences), skipped
        )

        return [
            FormatterOutput(
                suffix="-sentences.tsv",
                content=content,
                media_type="text/tab-separated-values",
            )
        ]
