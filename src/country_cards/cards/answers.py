# ABOUTME: Reads the hand-written answer half of an existing flashcard
# ABOUTME: Cards are split on the <!--question--> marker; embedded images are cut so renders can re-add them

from pathlib import Path

from country_cards.errors import AnswerMissingError

QUESTION_MARKER = "<!--question-->"
IMAGE_MARKER = "!["


def read_answer(directory: Path, stem: str) -> str:
    """Return the trimmed answer half of ``directory/stem.md``.

    Raises:
        AnswerMissingError: If the file is absent or does not hold exactly one marker
    """
    path = Path(directory) / f"{stem}.md"
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise AnswerMissingError(path, "file not found") from e

    parts = text.split(QUESTION_MARKER)
    if len(parts) != 2:
        raise AnswerMissingError(path, f"expected one {QUESTION_MARKER} marker, found {len(parts) - 1}")
    return parts[1].strip()


def strip_embedded_image(answer: str) -> str:
    """Drop a trailing image reference and everything after it."""
    if IMAGE_MARKER in answer:
        answer = answer.split(IMAGE_MARKER, 1)[0].strip()
    return answer
