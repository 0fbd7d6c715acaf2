"""
Black card pick/draw counts.
"""

from __future__ import annotations

import re

from pyx_shared.models.cards import PromptMetrics

_BLANK_SPLIT = re.compile(r"____+")
_SENTENCE_PUNCTUATION = str.maketrans("", "", "!?.")


def pick(text: str) -> int:
    """Number of white cards played on this black card."""
    # remove punctuation so a blank followed by it is still a trailing blank
    no_punct = text.translate(_SENTENCE_PUNCTUATION)
    # re.split keeps trailing empty segments
    segments = _BLANK_SPLIT.split(no_punct)
    if len(segments) == 1:
        # no blanks at all
        return 1
    return len(segments) - 1


def draw(text: str) -> int:
    """Extra white cards dealt to the players for cards with more than two picks."""
    count = pick(text)
    if count > 2:
        return count - 1
    return 0


def prompt_metrics(text: str) -> PromptMetrics:
    return PromptMetrics(pick=pick(text), draw=draw(text))
