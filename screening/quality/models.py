from dataclasses import dataclass, field


@dataclass(frozen=True)
class TextQualityVerdict:
    """Outcome of the garble heuristics for one text.

    ``garbled`` is true when either the whole-text check or the prefix check
    fails. ``reasons`` names every heuristic that fired.
    """

    garbled: bool
    body_garbled: bool
    prefix_garbled: bool
    letter_ratio: float = 0.0
    symbol_ratio: float = 0.0
    prefix_symbol_ratio: float = 0.0
    prefix_punctuation_ratio: float = 0.0
    reasons: tuple[str, ...] = field(default_factory=tuple)
