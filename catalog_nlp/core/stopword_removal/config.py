from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable


def _to_set(x: Iterable[str] | None) -> FrozenSet[str]:
    return frozenset(map(str, x or []))


# numbers and version/processing-level codes that litter titles and descriptions
CATALOG_NOISE_WORDS = _to_set(
    [str(i) for i in range(1, 11)]
    + ["v1", "v03", "l2", "l3", "l4", "v5.2.0", "v003", "v004", "v005", "v006", "v7"]
)

# markup residue left in description fields
MARKUP_NOISE_WORDS = _to_set(
    [
        "nbsp",
        "amp",
        "gt",
        "lt",
        "timesnewromanpsmt",
        "font",
        "td",
        "li",
        "br",
        "tr",
        "quot",
        "st",
        "img",
        "src",
        "strong",
        "http",
        "file",
        "files",
    ]
    + [str(i) for i in range(1, 13)]
)


@dataclass(frozen=True)
class StopwordConfig:
    language: str = "english"
    use_nltk: bool = True  # merge NLTK's list when its corpus is installed
    custom_stopwords: FrozenSet[str] = field(default_factory=frozenset)
    exclude_stopwords: FrozenSet[str] = field(
        default_factory=frozenset
    )  # words to keep even if in list
    lowercase: bool = True
