"""End-to-end smoke tests for the Typer-based unihub CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer
from loguru import logger
from typer.testing import CliRunner

from unihub.__main__ import main
from unihub.app.links import NO_WEBSITE_MESSAGE, LinkOpener
from unihub.app.state import EMPTY_RESULT_MESSAGE, AppState
from unihub.catalog import load
from unihub.cli.browse import apply_command
from unihub.cli.common import CLIError, merge_overrides, parse_override
from unihub.cli.main import app


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger.remove()


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def cli_env(tmp_path: Path) -> dict[str, str]:
    return {
        "UNIHUB_SETTINGS__PATHS__LOGS_DIR": str(tmp_path / "logs"),
        "UNIHUB_SETTINGS__LOGGING__TO_FILE": "false",
        "UNIHUB_SETTINGS__LOGGING__LEVEL": "WARNING",
    }


@pytest.fixture()
def catalog_file(tmp_path: Path) -> Path:
    payload = {
        "public_universities": [
            {"name": "Example University", "type": "Public University", "website": "https://example.ac.za"},
            {"name": "Other College", "type": "Public TVET College"},
        ],
        "private_colleges": [
            {"name": "Sample College", "type": "Private College", "website": "https://sample.co.za"},
            {"name": "Quiet College", "type": "Private College"},
        ],
        "research_councils": [
            {"name": "Data Council", "type": "Research Council", "website": "https://data.org.za"},
        ],
    }
    path = tmp_path / "institutions.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture()
def opened(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    urls: list[str] = []

    def launcher(url: str) -> bool:
        urls.append(url)
        return True

    opener = LinkOpener(launcher=launcher)
    monkeypatch.setattr("unihub.cli.catalog._link_opener", opener)
    monkeypatch.setattr("unihub.cli.browse._link_opener", opener)
    return urls


def test_parse_override_builds_nested_mapping() -> None:
    assert parse_override("catalog.default_category=private_colleges") == {
        "catalog": {"default_category": "private_colleges"}
    }
    assert parse_override("logging.to_file=false") == {"logging": {"to_file": False}}
    with pytest.raises(typer.BadParameter):
        parse_override("catalog.default_category")


def test_merge_overrides_is_deep() -> None:
    merged = merge_overrides(
        [
            {"catalog": {"default_category": "a"}},
            {"catalog": {"encoding": "utf-8"}},
        ]
    )
    assert merged == {"catalog": {"default_category": "a", "encoding": "utf-8"}}


def test_list_filters_default_category(runner: CliRunner, cli_env: dict[str, str], catalog_file: Path) -> None:
    result = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "list", "--query", "ac.za"],
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert "Example University" in result.output
    assert "Other College" not in result.output


def test_list_accepts_tab_label_and_override(runner: CliRunner, cli_env: dict[str, str], catalog_file: Path) -> None:
    by_label = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "list", "Private Coll"],
        env=cli_env,
    )
    by_override = runner.invoke(
        app,
        [
            "--catalog-file",
            str(catalog_file),
            "-o",
            "catalog.default_category=private_colleges",
            "catalog",
            "list",
        ],
        env=cli_env,
    )

    for result in (by_label, by_override):
        assert result.exit_code == 0, result.output
        assert "Sample College" in result.output
        assert "Quiet College" in result.output
        assert "Example University" not in result.output


def test_list_reports_empty_results(runner: CliRunner, cli_env: dict[str, str], catalog_file: Path) -> None:
    no_match = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "list", "-q", "nothing-like-this"],
        env=cli_env,
    )
    missing_category = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "list", "Public TVET"],
        env=cli_env,
    )

    for result in (no_match, missing_category):
        assert result.exit_code == 0, result.output
        assert EMPTY_RESULT_MESSAGE in result.output


def test_search_spans_all_categories(runner: CliRunner, cli_env: dict[str, str], catalog_file: Path) -> None:
    result = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "search", "COLLEGE"],
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert "Other College" in result.output
    assert "Sample College" in result.output
    assert "Data Council" not in result.output


def test_categories_lists_tabs_and_extra_keys(runner: CliRunner, cli_env: dict[str, str], catalog_file: Path) -> None:
    result = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "categories"],
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert "Public Uni" in result.output
    assert "Private HE" in result.output
    assert "research_councils" in result.output


def test_open_launches_website(
    runner: CliRunner, cli_env: dict[str, str], catalog_file: Path, opened: list[str]
) -> None:
    result = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "open", "Public Uni", "example university"],
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert opened == ["https://example.ac.za"]


def test_open_without_website_is_reported(
    runner: CliRunner, cli_env: dict[str, str], catalog_file: Path, opened: list[str]
) -> None:
    result = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "open", "private_colleges", "Quiet College"],
        env=cli_env,
    )

    assert result.exit_code == 1
    assert NO_WEBSITE_MESSAGE in result.output
    assert opened == []


def test_open_unknown_institution_is_cli_error(
    runner: CliRunner, cli_env: dict[str, str], catalog_file: Path, opened: list[str]
) -> None:
    result = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "catalog", "open", "Public Uni", "Nowhere"],
        env=cli_env,
    )

    assert result.exit_code != 0
    assert isinstance(result.exception, CLIError)


def test_validate_reports_counts(runner: CliRunner, cli_env: dict[str, str], catalog_file: Path) -> None:
    result = runner.invoke(app, ["catalog", "validate", str(catalog_file)], env=cli_env)

    assert result.exit_code == 0, result.output
    assert "Valid catalog" in result.output
    assert "research_councils" in result.output


def test_validate_rejects_invalid_catalog(runner: CliRunner, cli_env: dict[str, str], tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text(json.dumps({"public_universities": [{"name": "No Type"}]}), encoding="utf-8")

    result = runner.invoke(app, ["catalog", "validate", str(broken)], env=cli_env)

    assert result.exit_code != 0
    assert isinstance(result.exception, CLIError)
    assert "Failed to load institutions" in str(result.exception)


def test_missing_catalog_file_is_cli_error(runner: CliRunner, cli_env: dict[str, str], tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["--catalog-file", str(tmp_path / "missing.json"), "catalog", "list"],
        env=cli_env,
    )

    assert result.exit_code != 0
    assert isinstance(result.exception, CLIError)
    assert "Failed to load institutions" in str(result.exception)


def test_config_shows_resolved_settings(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(
        app,
        ["-o", "catalog.default_category=public_tvet_colleges", "config"],
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert "public_tvet_colleges" in result.output


def test_browse_session(
    runner: CliRunner, cli_env: dict[str, str], catalog_file: Path, opened: list[str]
) -> None:
    session = "\n".join(["college", "/tab Private Coll", "/open 2", "/open 1", "/quit"]) + "\n"

    result = runner.invoke(
        app,
        ["--catalog-file", str(catalog_file), "browse"],
        input=session,
        env=cli_env,
    )

    assert result.exit_code == 0, result.output
    assert "Other College" in result.output
    assert "Sample College" in result.output
    assert NO_WEBSITE_MESSAGE in result.output
    assert opened == ["https://sample.co.za"]


def test_browse_ends_on_end_of_input(runner: CliRunner, cli_env: dict[str, str], catalog_file: Path) -> None:
    result = runner.invoke(app, ["--catalog-file", str(catalog_file), "browse"], input="", env=cli_env)
    assert result.exit_code == 0, result.output
    assert "Example University" in result.output


def test_browse_load_failure_exits(runner: CliRunner, cli_env: dict[str, str], tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("not json", encoding="utf-8")

    result = runner.invoke(app, ["--catalog-file", str(broken), "browse"], input="", env=cli_env)

    assert result.exit_code == 2
    assert "Failed to load institutions" in result.output


def test_apply_command_transitions(catalog_file: Path) -> None:
    view = AppState.initial().load_succeeded(load(catalog_file.read_text(encoding="utf-8")))

    queried = apply_command(view, "Example")
    assert queried is not None and queried.query == "Example"

    switched = apply_command(queried, "/tab Private Coll")
    assert switched is not None and switched.category == "private_colleges"

    cleared = apply_command(switched, "/clear")
    assert cleared is not None and cleared.query == ""

    assert apply_command(cleared, "/quit") is None
    assert apply_command(cleared, "/help") is cleared
    assert apply_command(cleared, "/open 9") is cleared


def test_verbose_context_lists_overrides(runner: CliRunner, cli_env: dict[str, str]) -> None:
    result = runner.invoke(app, ["-v", "-o", "logging.rotation=5MB", "config"], env=cli_env)

    assert result.exit_code == 0, result.output
    assert "CLI Context" in result.output
    assert "Overrides" in result.output
    assert "rotation" in result.output


@pytest.mark.parametrize(
    "argv",
    [
        ["catalog", "open"],
        ["catalog", "list", "--bogus"],
        ["-o", "noequals", "config"],
    ],
)
def test_console_script_reports_usage_errors(
    argv: list[str],
    cli_env: dict[str, str],
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    for key, value in cli_env.items():
        monkeypatch.setenv(key, value)

    with pytest.raises(SystemExit) as excinfo:
        main(argv)

    assert excinfo.value.code == 2
    captured = capsys.readouterr()
    assert "Error" in captured.out + captured.err
    assert "Traceback" not in captured.out + captured.err


def test_console_script_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])

    assert excinfo.value.code in (0, 2)
    captured = capsys.readouterr()
    assert "catalog" in captured.out + captured.err


def test_console_script_renders_cli_error(
    cli_env: dict[str, str],
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    for key, value in cli_env.items():
        monkeypatch.setenv(key, value)

    code = main(["--catalog-file", str(tmp_path / "missing.json"), "catalog", "list"])

    assert code == 2
    captured = capsys.readouterr()
    assert "Error: Failed to load institutions" in captured.out
    assert "Traceback" not in captured.out + captured.err


def test_console_script_success_exits_zero(
    cli_env: dict[str, str], catalog_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    for key, value in cli_env.items():
        monkeypatch.setenv(key, value)

    with pytest.raises(SystemExit) as excinfo:
        main(["--catalog-file", str(catalog_file), "catalog", "categories"])

    assert excinfo.value.code == 0
