# ABOUTME: Tests for the command line interface
# ABOUTME: Runs commands through the asyncclick test runner with HTTP served by pytest-httpx

import pytest
import structlog
from asyncclick.testing import CliRunner
from conftest import build_export
from loguru import logger

from country_cards.main import app as main
from country_cards.wiki.media import media_url

EXPORT = "https://en.wikipedia.org/wiki/Special:Export"

BAHAMAS = """{{Infobox country
| image_flag = Flag of the Bahamas.svg
| image_map = The Bahamas on the globe (Americas centered).svg
| capital = [[Nassau, Bahamas|Nassau]]
}}
"""


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point every configured directory into tmp_path and reset global logging afterwards."""
    monkeypatch.chdir(tmp_path)
    for name, value in {
        "PAGES_DIR": "pages",
        "FILES_DIR": "files",
        "OUTPUT_DIR": "countries",
        "COUNTRY_LIST_FILE": "countries.txt",
        "RATE_LIMIT_CAPACITY": "100",
    }.items():
        monkeypatch.setenv(f"COUNTRY_CARDS_{name}", value)
    monkeypatch.setattr("country_cards.config._config_instance", None)

    yield tmp_path

    structlog.reset_defaults()
    logger.remove()


def test_main_function_exists():
    assert callable(main)


@pytest.mark.asyncio
async def test_main_command_help(workspace):
    runner = CliRunner()
    result = await runner.invoke(main, ["--help"])

    assert result.exit_code == 0
    assert "Country Cards" in result.output
    assert "run" in result.output


@pytest.mark.asyncio
async def test_main_with_logging_status(workspace):
    runner = CliRunner()
    result = await runner.invoke(main, ["logging-status"])

    assert result.exit_code == 0
    assert "Logging Configuration" in result.output


@pytest.mark.asyncio
async def test_log_mode_setting_selects_logging_mode(workspace, monkeypatch):
    calls = []
    monkeypatch.setenv("COUNTRY_CARDS_LOG_MODE", "production")
    monkeypatch.setattr("country_cards.main.configure_logging", lambda **kwargs: calls.append(kwargs))

    runner = CliRunner()
    result = await runner.invoke(main, ["logging-status"])

    assert result.exit_code == 0
    assert calls[0]["mode"] == "production"


@pytest.mark.asyncio
async def test_json_flag_forces_production_logging(workspace, monkeypatch):
    calls = []
    monkeypatch.setenv("COUNTRY_CARDS_LOG_MODE", "interactive")
    monkeypatch.setattr("country_cards.main.configure_logging", lambda **kwargs: calls.append(kwargs))

    runner = CliRunner()
    await runner.invoke(main, ["--json", "logging-status"])

    assert calls[0]["mode"] == "production"


@pytest.mark.asyncio
async def test_locate_prints_sharded_url(workspace):
    runner = CliRunner()
    result = await runner.invoke(main, ["locate", "Flag of Japan.svg"])

    assert result.exit_code == 0
    assert "https://upload.wikimedia.org/wikipedia/commons/9/9e/Flag_of_Japan.svg" in result.output


@pytest.mark.asyncio
async def test_run_single_country(workspace, httpx_mock):
    map_file = "The_Bahamas_on_the_globe_(Americas_centered).svg"
    httpx_mock.add_response(
        url=f"{EXPORT}/Bahamas", content=build_export("Bahamas", "#REDIRECT [[The Bahamas]]", "The Bahamas")
    )
    httpx_mock.add_response(url=f"{EXPORT}/The_Bahamas", content=build_export("The Bahamas", BAHAMAS))
    httpx_mock.add_response(url=media_url(map_file), content=b"map")
    httpx_mock.add_response(url=media_url("Flag_of_the_Bahamas.svg"), content=b"flag")
    countries = workspace / "countries"
    countries.mkdir()
    (countries / "The_Bahamas_location.md").write_text("Q\n<!--question-->\nCaribbean.", encoding="utf-8")

    runner = CliRunner()
    result = await runner.invoke(main, ["--json", "run", "--country", "Bahamas"])

    assert result.exit_code == 0, result.output
    assert (countries / "capitals" / "The_Bahamas.md").read_text(encoding="utf-8").endswith("Nassau")
    assert (countries / "images" / map_file).read_bytes() == b"map"
    assert (workspace / "pages" / "The_Bahamas").is_file()
    assert not (workspace / "countries.txt").exists()


@pytest.mark.asyncio
async def test_run_failure_exits_non_zero(workspace):
    pages = workspace / "pages"
    pages.mkdir()
    (pages / "Atlantis").write_bytes(build_export("Atlantis", "| capital = [[Poseidonia]]\n"))

    runner = CliRunner()
    result = await runner.invoke(main, ["--json", "run", "--country", "Atlantis"])

    assert result.exit_code == 1
    assert not (workspace / "countries").exists()


@pytest.mark.asyncio
async def test_run_rejects_negative_position(workspace):
    runner = CliRunner()
    result = await runner.invoke(main, ["--json", "run", "--position", "-1"])

    assert result.exit_code == 2
