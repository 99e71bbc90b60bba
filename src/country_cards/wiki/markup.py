# ABOUTME: Pattern helpers for pulling template fields out of wikitext and cleaning their values
# ABOUTME: Each cleaning rule is a separate pure function; parse_wiki_file/parse_wiki_link compose them

import re

from country_cards.errors import MarkupError
from country_cards.wiki.titles import to_storage_key

FILE_TAG = "File:"
LINK_FILE_TAG = "[[File:"
LINK_OPEN = "[["
LINK_CLOSE = "]]"
TEMPLATE_PIPE = "{{!}}"


def template_field_pattern(key: str) -> re.Pattern[str]:
    """Pattern for an infobox line such as ``| image_map = Country.svg``."""
    return re.compile(rf"{re.escape(key)}\s+= (.+?)\n")


def find_template_field(text: str, key: str) -> str | None:
    """Return the raw value of the first ``key = value`` line, or None when absent."""
    match = template_field_pattern(key).search(text)
    return match.group(1) if match else None


def take_file_reference(value: str) -> str:
    """Keep the file name from a ``[[File:...|...]]`` link or a bare ``File:`` marker.

    The link form keeps the target up to whichever of the first pipe or the
    closing brackets comes first; the bare form keeps everything after the
    marker. Values with neither marker pass through.
    """
    start = value.find(LINK_FILE_TAG)
    if start > -1:
        value = value[start + len(LINK_FILE_TAG) :]
        ends = [end for end in (value.find("|"), value.find(LINK_CLOSE)) if end > -1]
        return value[: min(ends)] if ends else value

    start = value.find(FILE_TAG)
    if start > -1:
        return value[start + len(FILE_TAG) :]
    return value


def strip_inline_comment(value: str) -> str:
    """Remove everything from the first ``<`` through the first ``>``."""
    start = value.find("<")
    if start == -1:
        return value
    end = value.find(">")
    if end < start:
        raise MarkupError(f"unbalanced comment markers in {value!r}")
    return value[:start] + value[end + 1 :]


def strip_template_pipe(value: str) -> str:
    """Drop the ``{{!}}`` escaped pipe and everything after it."""
    index = value.find(TEMPLATE_PIPE)
    return value[:index] if index > -1 else value


def parse_wiki_file(value: str) -> str:
    """Clean a file field value down to its storage name.

    >>> parse_wiki_file("[[File:Flag of Japan.svg|thumb]]")
    'Flag_of_Japan.svg'
    """
    value = take_file_reference(value)
    value = strip_inline_comment(value)
    value = strip_template_pipe(value)
    return to_storage_key(value.strip())


def parse_wiki_link(value: str) -> str:
    """Clean a link field value down to its display text.

    Unlike file references, a piped link keeps the part *after* the pipe.

    >>> parse_wiki_link("[[Tokyo|Capital]]")
    'Capital'
    """
    start = value.find(LINK_OPEN)
    if start > -1:
        value = value[start + len(LINK_OPEN) :]
        end = value.find(LINK_CLOSE)
        if end > -1:
            value = value[:end]
        value = value.strip()

    pipe = value.find("|")
    if pipe > -1:
        value = value[pipe + 1 :]
    return value
