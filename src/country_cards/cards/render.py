# ABOUTME: CountryRecord model and the four Markdown flashcard templates rendered from it
# ABOUTME: Also owns the output layout (card paths and media directories under the output root)

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

IMAGES_DIR = "images"


class CountryRecord(BaseModel):
    """Resolved facts for one country, ready for rendering."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Country display name")
    map_image_url: str = Field(description="Relative link to the location map image")
    flag_image_url: str = Field(description="Relative link to the flag image")
    capital: str = Field(description="Capital text, may contain Markdown")
    answer_location: str = Field(default="", description="Hand-written location answer")


class CardKind(str, Enum):
    """The flashcard variants produced for each country."""

    LOCATION = "location"
    WORLD = "world"
    CAPITAL = "capital"
    FLAG = "flag"


TEMPLATES: dict[CardKind, str] = {
    CardKind.LOCATION: (
        "Where in the world is **{name}**?\n"
        "<!--question-->\n"
        "{answer_location}\n"
        "\n"
        "![Map of {name}]({map_image_url})"
    ),
    CardKind.WORLD: (
        "Which country is this?\n"
        "\n"
        "![Map of a country]({map_image_url})\n"
        "<!--question-->\n"
        "**{name}**"
    ),
    CardKind.CAPITAL: (
        "What is the capital of **{name}**?\n"
        "<!--question-->\n"
        "{capital}"
    ),
    CardKind.FLAG: (
        "Which country does this flag belong to?\n"
        "\n"
        "![Flag of {name}]({flag_image_url})\n"
        "<!--question-->\n"
        "**{name}**"
    ),
}


def render_card(kind: CardKind, record: CountryRecord) -> str:
    return TEMPLATES[kind].format_map(record.model_dump())


@dataclass(frozen=True)
class CardLayout:
    """Where cards and their media live under the output root.

    ``countries/{key}_location.md``, ``countries/{key}.md``,
    ``countries/flags/{key}.md`` and ``countries/capitals/{key}.md``, with map
    images in ``countries/images`` and flag images in ``countries/flags/images``.
    """

    root: Path

    @property
    def map_images_dir(self) -> Path:
        return self.root / IMAGES_DIR

    @property
    def flag_images_dir(self) -> Path:
        return self.root / "flags" / IMAGES_DIR

    def location_stem(self, key: str) -> str:
        return f"{key}_location"

    def card_path(self, kind: CardKind, key: str) -> Path:
        if kind is CardKind.LOCATION:
            return self.root / f"{self.location_stem(key)}.md"
        if kind is CardKind.WORLD:
            return self.root / f"{key}.md"
        if kind is CardKind.FLAG:
            return self.root / "flags" / f"{key}.md"
        return self.root / "capitals" / f"{key}.md"

    @staticmethod
    def image_link(file_name: str) -> str:
        """Card-relative link; every card directory has its own ``images`` folder."""
        return f"{IMAGES_DIR}/{file_name}"


def write_card(layout: CardLayout, kind: CardKind, key: str, record: CountryRecord) -> Path:
    path = layout.card_path(kind, key)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_card(kind, record), encoding="utf-8")
    return path
