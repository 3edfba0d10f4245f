"""Tests for CLI commands."""

import configparser
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from xr.catalog.base import CatalogEntry, CatalogError, CatalogSearchResult
from xr.cli.main import EXIT_CANCELLED, cli
from xr.media.cache import DurationCache
from xr.utils.errors import MatchCancelled


@pytest.fixture
def runner():
    """Create Click CLI runner."""
    return CliRunner()


@pytest.fixture
def isolated(runner, tmp_path, monkeypatch):
    """Isolated working directory with a local config file."""
    monkeypatch.setattr("xr.config.manager.get_user_config_dir", lambda: tmp_path / "user")
    with runner.isolated_filesystem(temp_dir=tmp_path) as td:
        config = configparser.ConfigParser()
        config["catalog"] = {"cache_enabled": "false"}
        with open(Path(td) / ".xr.conf", "w") as f:
            config.write(f)
        yield Path(td)


@pytest.fixture
def client():
    """Catalog client stub used by the search and extras commands."""
    client = Mock()
    with patch("xr.workflows.extras.build_client", return_value=client):
        yield client


class TestSearchCommand:
    """Test the search command."""

    def test_search_lists_results(self, runner, isolated, client):
        """Test results are shown in a table."""
        client.search.return_value = [
            CatalogSearchResult("Matrix (The)", "film.php?fid=1001", "Blu-ray"),
        ]

        result = runner.invoke(cli, ["search", "The Matrix", "--year", "1999"])

        assert result.exit_code == 0
        assert "film.php?fid=1001" in result.output
        client.search.assert_called_once_with("Matrix (The)", director="", year="1999")

    def test_search_no_results(self, runner, isolated, client):
        """Test an empty result set is reported."""
        client.search.return_value = []

        result = runner.invoke(cli, ["search", "Nothing"])

        assert result.exit_code == 0
        assert "No releases found" in result.output

    def test_search_error(self, runner, isolated, client):
        """Test catalog failures exit with status 1."""
        client.search.side_effect = CatalogError("offline")

        result = runner.invoke(cli, ["search", "Matrix"])

        assert result.exit_code == 1
        assert "offline" in result.output


class TestExtrasCommand:
    """Test the extras command."""

    def test_lists_extras(self, runner, isolated, client):
        """Test extras are shown with their durations."""
        client.get_extras.return_value = [CatalogEntry("Making Of", "5:26")]

        result = runner.invoke(cli, ["extras", "film.php?fid=1001"])

        assert result.exit_code == 0
        assert "Making Of" in result.output
        assert "5:26" in result.output

    def test_no_extras(self, runner, isolated, client):
        """Test a release without extras."""
        client.get_extras.return_value = []

        result = runner.invoke(cli, ["extras", "film.php?fid=1001"])

        assert result.exit_code == 0
        assert "No extras found" in result.output


class TestMatchCommand:
    """Test the match command."""

    @pytest.fixture
    def workflow(self):
        """Workflow stub returned by get_workflow."""
        workflow = Mock()
        with patch("xr.cli.main.get_workflow", return_value=workflow):
            yield workflow

    def test_requires_release(self, runner, isolated, workflow):
        """Test that --dvd or --title is required."""
        result = runner.invoke(cli, ["match", str(isolated)])

        assert result.exit_code == 1
        assert "--dvd" in result.output
        workflow.run.assert_not_called()

    def test_runs_workflow(self, runner, isolated, workflow):
        """Test arguments are passed through to the workflow."""
        workflow.run.return_value = True

        result = runner.invoke(cli, ["match", str(isolated), "--dvd", "film.php?fid=1", "--force"])

        assert result.exit_code == 0
        kwargs = workflow.run.call_args.kwargs
        assert kwargs["directory"] == isolated
        assert kwargs["href"] == "film.php?fid=1"
        assert kwargs["force"] is True

    def test_defaults_to_current_directory(self, runner, isolated, workflow):
        """Test the directory argument is optional."""
        workflow.run.return_value = True

        result = runner.invoke(cli, ["match", "--title", "Alien"])

        assert result.exit_code == 0
        assert workflow.run.call_args.kwargs["directory"] == Path.cwd()

    def test_failure_exit_code(self, runner, isolated, workflow):
        """Test an unsuccessful run exits with status 1."""
        workflow.run.return_value = False

        result = runner.invoke(cli, ["match", str(isolated), "--dvd", "x"])

        assert result.exit_code == 1

    def test_cancelled_exit_code(self, runner, isolated, workflow):
        """Test a cancelled run has its own exit status."""
        workflow.run.side_effect = MatchCancelled("cancelled")

        result = runner.invoke(cli, ["match", str(isolated), "--dvd", "x"])

        assert result.exit_code == EXIT_CANCELLED
        assert "Matching cancelled" in result.output

    def test_end_to_end_dry_run(self, runner, isolated, make_oracle):
        """Test a dry run through the real workflow renames nothing."""
        (isolated / "clip2.mkv").write_bytes(b"fake")
        client = Mock()
        client.get_extras.return_value = [CatalogEntry("Storyboards", "0:59")]
        client.page_url.return_value = "https://example.test/x"
        oracle = make_oracle({"clip2.mkv": 58.9})

        with patch("xr.workflows.extras.build_client", return_value=client), patch(
            "xr.workflows.extras.DurationCache",
            side_effect=lambda: DurationCache(oracle),
        ):
            result = runner.invoke(cli, ["--dry-run", "match", str(isolated), "--dvd", "x", "-f"])

        assert result.exit_code == 0
        assert "Would rename 'clip2.mkv' to 'Storyboards.mkv'" in result.output
        assert (isolated / "clip2.mkv").exists()


class TestConfigCommands:
    """Test config CLI commands."""

    def test_config_set_local(self, runner, isolated):
        """Test setting a value in the local config."""
        result = runner.invoke(cli, ["config", "set", "matching.tolerance", "2", "--target", "local"])

        assert result.exit_code == 0
        parser = configparser.ConfigParser()
        parser.read(isolated / ".xr.conf")
        assert parser.get("matching", "tolerance") == "2"

    def test_config_set_requires_section(self, runner, isolated):
        """Test keys without a section are rejected."""
        result = runner.invoke(cli, ["config", "set", "tolerance", "2"])

        assert result.exit_code == 1
        assert "section.key" in result.output

    def test_config_set_dry_run(self, runner, isolated):
        """Test dry run does not write the file."""
        result = runner.invoke(cli, ["--dry-run", "config", "set", "matching.tolerance", "3"])

        assert result.exit_code == 0
        assert "Would set matching.tolerance = 3" in result.output

    def test_config_list(self, runner, isolated):
        """Test listing shows defaults and file values."""
        result = runner.invoke(cli, ["config", "list"])

        assert result.exit_code == 0
        assert "tolerance" in result.output
        assert "cache_enabled" in result.output

    def test_config_list_unknown_section(self, runner, isolated):
        """Test listing a missing section."""
        result = runner.invoke(cli, ["config", "list", "--section", "nope"])

        assert result.exit_code == 0
        assert "empty or does not exist" in result.output
