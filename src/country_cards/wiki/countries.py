# ABOUTME: Bootstraps the country list from the member-states seed article
# ABOUTME: One regex pass over {{Flagicon|X}} [[Target|Label]] rows, sorted and written as a flat list file

import re
from collections.abc import Iterable
from pathlib import Path

# {{Flagicon|Country}} [[Actual Country|Country]]
COUNTRY_ROW_PATTERN = re.compile(r"\{\{Flagicon\|[\w ]+\}\} \[\[(.+?)[|\]]")


def parse_country_names(text: str) -> list[str]:
    """Return the sorted article titles linked from flag-icon rows."""
    return sorted(match.group(1) for match in COUNTRY_ROW_PATTERN.finditer(text))


def write_country_list(names: Iterable[str], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(names), encoding="utf-8")
    return path
