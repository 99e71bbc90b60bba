# ABOUTME: Tests for flashcard rendering and the output directory layout

import pytest

from country_cards.cards.render import CardKind, CardLayout, CountryRecord, render_card, write_card


@pytest.fixture
def record():
    return CountryRecord(
        name="Japan",
        map_image_url="images/Japan_(orthographic_projection).svg",
        flag_image_url="images/Flag_of_Japan.svg",
        capital="Tokyo",
        answer_location="East Asia.",
    )


class TestRenderCard:
    def test_location_card(self, record):
        assert render_card(CardKind.LOCATION, record) == (
            "Where in the world is **Japan**?\n"
            "<!--question-->\n"
            "East Asia.\n"
            "\n"
            "![Map of Japan](images/Japan_(orthographic_projection).svg)"
        )

    def test_world_card_hides_name_in_question(self, record):
        question, answer = render_card(CardKind.WORLD, record).split("<!--question-->")

        assert "Japan" not in question
        assert "![Map of a country](images/Japan_(orthographic_projection).svg)" in question
        assert answer.strip() == "**Japan**"

    def test_capital_card(self, record):
        assert render_card(CardKind.CAPITAL, record) == "What is the capital of **Japan**?\n<!--question-->\nTokyo"

    def test_flag_card(self, record):
        question, answer = render_card(CardKind.FLAG, record).split("<!--question-->")

        assert "![Flag of Japan](images/Flag_of_Japan.svg)" in question
        assert answer.strip() == "**Japan**"

    def test_markdown_in_capital_is_kept(self, record):
        record = record.model_copy(update={"capital": "Malabo *(current)*"})

        assert render_card(CardKind.CAPITAL, record).endswith("Malabo *(current)*")

    @pytest.mark.parametrize("kind", list(CardKind))
    def test_every_card_has_one_marker(self, record, kind):
        assert render_card(kind, record).count("<!--question-->") == 1


class TestCardLayout:
    def test_paths(self, tmp_path):
        layout = CardLayout(tmp_path)

        assert layout.card_path(CardKind.LOCATION, "The_Bahamas") == tmp_path / "The_Bahamas_location.md"
        assert layout.card_path(CardKind.WORLD, "The_Bahamas") == tmp_path / "The_Bahamas.md"
        assert layout.card_path(CardKind.FLAG, "The_Bahamas") == tmp_path / "flags" / "The_Bahamas.md"
        assert layout.card_path(CardKind.CAPITAL, "The_Bahamas") == tmp_path / "capitals" / "The_Bahamas.md"
        assert layout.map_images_dir == tmp_path / "images"
        assert layout.flag_images_dir == tmp_path / "flags" / "images"

    def test_write_card_creates_directories(self, tmp_path, record):
        path = write_card(CardLayout(tmp_path / "countries"), CardKind.CAPITAL, "Japan", record)

        assert path == tmp_path / "countries" / "capitals" / "Japan.md"
        assert path.read_text(encoding="utf-8").endswith("Tokyo")

    def test_write_card_overwrites(self, tmp_path, record):
        layout = CardLayout(tmp_path)
        write_card(layout, CardKind.CAPITAL, "Japan", record.model_copy(update={"capital": "Kyoto"}))

        path = write_card(layout, CardKind.CAPITAL, "Japan", record)

        assert path.read_text(encoding="utf-8").endswith("Tokyo")
