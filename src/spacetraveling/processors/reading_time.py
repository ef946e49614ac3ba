"""Reading time estimation for post content.

Counts words in every block's heading and flattened rich-text body and
divides the total by a fixed reading speed.
"""

from __future__ import annotations

import math
from typing import Iterable

from ..core.models import ContentBlock

WORDS_PER_MINUTE = 180


def count_block_words(block: ContentBlock) -> int:
    """Words in a block's heading plus words in its plain-text body."""
    return len(block.heading.split()) + len(block.body_text.split())


def count_words(content: Iterable[ContentBlock]) -> int:
    """Total words across all blocks."""
    total = 0
    for block in content:
        total += count_block_words(block)
    return total


def estimate_reading_time(content: Iterable[ContentBlock], words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Estimate reading time in whole minutes, rounded up.

    Empty content yields 0; any non-empty word count yields at least 1.
    """
    if words_per_minute <= 0:
        raise ValueError(f"words_per_minute must be positive, got {words_per_minute}")
    return math.ceil(count_words(content) / words_per_minute)
