# ABOUTME: Flashcard layer: answer fragments in, rendered Markdown cards out
# ABOUTME: Pipeline Stage 2: CountryFields + answer text -> CountryRecord -> four card documents

from .answers import read_answer, strip_embedded_image
from .render import CardKind, CardLayout, CountryRecord, render_card, write_card

__all__ = [
    "read_answer",
    "strip_embedded_image",
    "CardKind",
    "CardLayout",
    "CountryRecord",
    "render_card",
    "write_card",
]
