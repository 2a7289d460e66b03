"""String-keyed feature map with the CoNLL ``k=v|k=v`` text form."""

from __future__ import annotations

from nlp_structure.config import CONLL_EMPTY

_PAIR_DELIM = "|"
_KEY_VALUE_DELIM = "="


class FeatMap(dict):
    """Extra per-token features (``sem``, morphology, ...), str → str."""

    @classmethod
    def from_string(cls, text: str) -> FeatMap:
        """Parse ``k=v|k=v``; ``_`` or an empty string gives an empty map."""
        feats = cls()
        if not text or text == CONLL_EMPTY:
            return feats
        for pair in text.split(_PAIR_DELIM):
            key, _, value = pair.partition(_KEY_VALUE_DELIM)
            feats[key] = value
        return feats

    def __str__(self) -> str:
        if not self:
            return CONLL_EMPTY
        return _PAIR_DELIM.join(
            "{}{}{}".format(k, _KEY_VALUE_DELIM, v) for k, v in sorted(self.items())
        )
