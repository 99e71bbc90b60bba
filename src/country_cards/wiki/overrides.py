# ABOUTME: Hand-maintained field corrections for articles whose markup does not fit the usual patterns
# ABOUTME: Keyed by article storage key; values are used literally and never cleaned

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


def _frozen(mapping: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class OverrideTables:
    """Per-field override mappings from article key to literal value."""

    map_images: Mapping[str, str] = field(default_factory=dict)
    flag_images: Mapping[str, str] = field(default_factory=dict)
    capitals: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "map_images", _frozen(self.map_images))
        object.__setattr__(self, "flag_images", _frozen(self.flag_images))
        object.__setattr__(self, "capitals", _frozen(self.capitals))

    def merged(self, other: "OverrideTables") -> "OverrideTables":
        """Return a table where entries from ``other`` win."""
        return OverrideTables(
            map_images={**self.map_images, **other.map_images},
            flag_images={**self.flag_images, **other.flag_images},
            capitals={**self.capitals, **other.capitals},
        )


MAP_IMAGE_OVERRIDES = {
    "Czech_Republic": "EU-Czech_Republic.svg",
    "Myanmar": "Myanmar_on_the_globe_(Myanmar_centered).svg",
    "North_Macedonia": "Europe-Republic_of_North_Macedonia.svg",
    "Eritrea": "Eritrea_(Africa_orthographic_projection).svg",  # article names the file without "Africa"
    "Iceland": "Iceland_(orthographic_projection).svg",  # article file is spelled "Island"
}

FLAG_IMAGE_OVERRIDES = {
    "Federated_States_of_Micronesia": "Flag_of_the_Federated_States_of_Micronesia.svg",  # missing "the"
    "Honduras": "Flag_of_Honduras.svg",  # article uses the "_(darker_variant)" file
    "Seychelles": "Flag_of_Seychelles.svg",  # article file adds "the"
}

# Countries with several capitals or markup the link cleaner mangles
CAPITAL_OVERRIDES = {
    "Azerbaijan": "Baku",
    "Bolivia": "Sucre *(constitutional and judicial)* and La Paz *(executive and legislative)*",
    "Equatorial_Guinea": "Malabo *(current)* and Ciudad de la Paz *(under construction)*",
    "Eswatini": "Mbabane *(executive)* and Lobamba *(legislative)*",
    "Ivory_Coast": "Yamoussoukro *(de jure)* and Abidjan *(de facto)*",
    "Malaysia": "Kuala Lumpur and Putrajaya *(administrative)*",
    "South_Africa": "Pretoria *(executive)*, Cape Town *(legislative)* and Bloemfontein *(judicial)*",
    "Sri_Lanka": "Sri Jayawardenepura Kotte *(legislative)* and Colombo *(executive and judicial)*",
    "Switzerland": "None *(de jure)* and Bern *(de facto)*",
    "United_States": "Washington, D.C.",
    "Yemen": "Sana'a *(de jure)* and Aden *(Temporary capital)*",
}

DEFAULT_OVERRIDES = OverrideTables(
    map_images=MAP_IMAGE_OVERRIDES,
    flag_images=FLAG_IMAGE_OVERRIDES,
    capitals=CAPITAL_OVERRIDES,
)


class OverrideFile(BaseModel):
    """JSON layout of an extra override file."""

    model_config = ConfigDict(extra="forbid")

    map_images: dict[str, str] = Field(default_factory=dict)
    flag_images: dict[str, str] = Field(default_factory=dict)
    capitals: dict[str, str] = Field(default_factory=dict)


def load_overrides(path: Path) -> OverrideTables:
    """Read extra corrections from a JSON file shaped like OverrideFile."""
    parsed = OverrideFile.model_validate_json(Path(path).read_text(encoding="utf-8"))
    return OverrideTables(map_images=parsed.map_images, flag_images=parsed.flag_images, capitals=parsed.capitals)
