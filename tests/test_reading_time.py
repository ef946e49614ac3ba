import math

import pytest

from prismic_fakes import paragraph, words

from spacetraveling.core.models import ContentBlock
from spacetraveling.processors.reading_time import (
    count_block_words,
    count_words,
    estimate_reading_time,
)


def block(heading: str, body_words: int) -> ContentBlock:
    body = (paragraph(words(body_words)),) if body_words else ()
    return ContentBlock(heading=heading, body=body)


def test_single_block_of_180_words_takes_one_minute():
    content = [block("Intro", 179)]
    assert count_words(content) == 180
    assert estimate_reading_time(content) == 1


def test_words_are_summed_across_blocks_not_taken_from_last_block():
    content = [block("A B", 179), block("C", 0)]
    assert count_words(content) == 182
    # The last block alone holds a single word (one minute).
    assert estimate_reading_time(content) == 2


def test_empty_content_takes_zero_minutes():
    assert estimate_reading_time([]) == 0


def test_body_words_span_every_rich_text_block():
    rich = ContentBlock(
        heading="Heading here",
        body=(paragraph("one two"), {"type": "list-item", "text": "three", "spans": []}),
    )
    assert count_block_words(rich) == 5


def test_adjacent_blocks_are_joined_with_a_space():
    rich = ContentBlock(heading="", body=(paragraph("end"), paragraph("start")))
    assert count_block_words(rich) == 2


@pytest.mark.parametrize("counts", [[1], [90, 90], [179, 1, 1], [200, 200, 200, 1], [0, 0]])
def test_estimate_is_ceiling_of_total_over_speed(counts):
    content = [block("", n) for n in counts]
    assert estimate_reading_time(content) == math.ceil(sum(counts) / 180)


def test_estimate_never_decreases_as_blocks_are_appended():
    content = []
    previous = estimate_reading_time(content)
    for n in [5, 170, 10, 0, 400, 3]:
        content.append(block("Title words", n))
        current = estimate_reading_time(content)
        assert current >= previous
        previous = current


def test_custom_reading_speed():
    content = [block("", 200)]
    assert estimate_reading_time(content, words_per_minute=100) == 2


def test_non_positive_reading_speed_is_rejected():
    with pytest.raises(ValueError):
        estimate_reading_time([block("x", 1)], words_per_minute=0)
