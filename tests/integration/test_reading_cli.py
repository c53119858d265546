"""Integration tests for the readq command line."""

import json
import re
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner, Result

from src.cli import reading
from src.cli.reading import cli
from src.metadata.client import MetadataFetcher


FIXTURES_DIR = Path(__file__).parent.parent / "fixtures" / "config"

PAGES = {
    "/alice/n/n1": (
        '<html><head><meta property="og:title" content="Alice on Focus"></head>'
        '<body><a href="/hashtag/focus">#focus</a></body></html>'
    ),
    "/bob/n/n2": (
        '<html><head><meta property="og:title" content="Bob on Habits"></head>'
        "<body></body></html>"
    ),
}


def _page(request: httpx.Request) -> httpx.Response:
    body = PAGES.get(request.url.path)
    if body is None:
        return httpx.Response(404)
    return httpx.Response(200, text=body)


@pytest.fixture(autouse=True)
def offline_fetcher(monkeypatch: pytest.MonkeyPatch) -> None:
    """Serve article pages from memory instead of the network."""

    def factory(timeout: float, user_agent: str) -> MetadataFetcher:
        return MetadataFetcher(
            timeout=timeout,
            user_agent=user_agent,
            transport=httpx.MockTransport(_page),
        )

    monkeypatch.setattr(reading, "MetadataFetcher", factory)


@pytest.fixture
def runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Database path inside a temporary directory."""
    return tmp_path / "readq.sqlite"


def invoke(runner: CliRunner, db_path: Path, *args: str) -> Result:
    """Run the CLI against the temporary database."""
    return runner.invoke(
        cli,
        ["--db", str(db_path), "--owner", "tester", "--no-json-logs", *args],
    )


def save(runner: CliRunner, db_path: Path, url: str) -> str:
    """Save a URL and return the new article id."""
    result = invoke(runner, db_path, "save", url)
    assert result.exit_code == 0, result.output
    match = re.match(r"Saved (\w+): ", result.stdout)
    assert match is not None
    return match.group(1)


class TestSaveAndList:
    """Tests for saving and listing articles."""

    @pytest.mark.integration
    def test_save_fetches_metadata(self, runner: CliRunner, db_path: Path) -> None:
        """Test saving stores the fetched title."""
        save(runner, db_path, "https://note.com/alice/n/n1")

        result = invoke(runner, db_path, "list")

        assert result.exit_code == 0
        assert "Alice on Focus" in result.stdout
        assert "unread" in result.stdout

    @pytest.mark.integration
    def test_save_falls_back_when_page_missing(
        self, runner: CliRunner, db_path: Path
    ) -> None:
        """Test a 404 still saves the article with its URL as title."""
        save(runner, db_path, "https://note.com/carol/n/n9")

        result = invoke(runner, db_path, "list")

        assert "https://note.com/carol/n/n9" in result.stdout

    @pytest.mark.integration
    def test_save_rejects_invalid_url(self, runner: CliRunner, db_path: Path) -> None:
        """Test non-http URLs exit with status 1."""
        result = invoke(runner, db_path, "save", "ftp://note.com/alice/n/n1")

        assert result.exit_code == 1
        assert "Error:" in result.stderr

    @pytest.mark.integration
    def test_empty_collection(self, runner: CliRunner, db_path: Path) -> None:
        """Test empty views print placeholders."""
        assert invoke(runner, db_path, "list").stdout.strip() == "No articles."
        assert invoke(runner, db_path, "queue").stdout.strip() == "Queue is empty."
        assert (
            invoke(runner, db_path, "archive-suggestions").stdout.strip()
            == "No archive suggestions."
        )

    @pytest.mark.integration
    def test_list_filters_by_status(self, runner: CliRunner, db_path: Path) -> None:
        """Test --status limits the listing."""
        first = save(runner, db_path, "https://note.com/alice/n/n1")
        save(runner, db_path, "https://note.com/bob/n/n2")
        invoke(runner, db_path, "read", first)

        result = invoke(runner, db_path, "list", "--status", "read")

        assert "Alice on Focus" in result.stdout
        assert "Bob on Habits" not in result.stdout


class TestReadingFlow:
    """Tests for the read/progress/archive flow."""

    @pytest.mark.integration
    def test_queue_and_read(self, runner: CliRunner, db_path: Path) -> None:
        """Test read articles leave the queue and count in stats."""
        first = save(runner, db_path, "https://note.com/alice/n/n1")
        save(runner, db_path, "https://note.com/bob/n/n2")

        queue = invoke(runner, db_path, "queue")
        assert queue.stdout.startswith("Read next this ")
        assert "Alice on Focus" in queue.stdout

        read = invoke(runner, db_path, "read", first)
        assert read.exit_code == 0
        assert "Marked read: Alice on Focus" in read.stdout

        queue = invoke(runner, db_path, "queue")
        assert "Alice on Focus" not in queue.stdout
        assert "Bob on Habits" in queue.stdout

        stats = json.loads(invoke(runner, db_path, "stats", "--json").stdout)
        assert stats["total_read"] == 1
        assert stats["total_saved"] == 2
        assert stats["unread_count"] == 1
        assert stats["streak"] == 1
        assert stats["top_hashtags"] == [{"name": "focus", "count": 1}]

    @pytest.mark.integration
    def test_progress_and_illegal_transition(
        self, runner: CliRunner, db_path: Path
    ) -> None:
        """Test progress updates and the read -> reading rejection."""
        article_id = save(runner, db_path, "https://note.com/alice/n/n1")

        result = invoke(runner, db_path, "progress", article_id, "0.4")
        assert result.exit_code == 0
        assert result.stdout.startswith("reading (40%)")

        invoke(runner, db_path, "read", article_id)
        result = invoke(runner, db_path, "progress", article_id, "0.5")
        assert result.exit_code == 1
        assert "read -> reading" in result.stderr

    @pytest.mark.integration
    def test_progress_out_of_range(self, runner: CliRunner, db_path: Path) -> None:
        """Test click rejects progress outside [0, 1]."""
        article_id = save(runner, db_path, "https://note.com/alice/n/n1")

        result = invoke(runner, db_path, "progress", article_id, "1.5")

        assert result.exit_code == 2

    @pytest.mark.integration
    def test_memo(self, runner: CliRunner, db_path: Path) -> None:
        """Test memos are saved and cleared."""
        article_id = save(runner, db_path, "https://note.com/alice/n/n1")

        assert "Memo saved" in invoke(runner, db_path, "memo", article_id, "ch. 3").stdout
        assert "Memo cleared" in invoke(runner, db_path, "memo", article_id, " ").stdout

    @pytest.mark.integration
    def test_archive_and_delete(self, runner: CliRunner, db_path: Path) -> None:
        """Test archive counts and deletes."""
        first = save(runner, db_path, "https://note.com/alice/n/n1")
        second = save(runner, db_path, "https://note.com/bob/n/n2")

        result = invoke(runner, db_path, "archive", first, first)
        assert result.stdout.strip() == "Archived 1 article(s)."
        assert invoke(runner, db_path, "archive", first).stdout.strip() == (
            "Archived 0 article(s)."
        )

        result = invoke(runner, db_path, "delete", second)
        assert result.stdout.strip() == f"Deleted {second}."

    @pytest.mark.integration
    def test_unknown_article(self, runner: CliRunner, db_path: Path) -> None:
        """Test unknown ids exit with status 1."""
        result = invoke(runner, db_path, "read", "nope")

        assert result.exit_code == 1
        assert "no article with id 'nope'" in result.stderr

    @pytest.mark.integration
    def test_purge_requires_confirmation(
        self, runner: CliRunner, db_path: Path
    ) -> None:
        """Test purge refuses without --yes and deletes with it."""
        save(runner, db_path, "https://note.com/alice/n/n1")
        save(runner, db_path, "https://note.com/bob/n/n2")

        refused = invoke(runner, db_path, "purge")
        assert refused.exit_code == 1
        assert "--yes" in refused.stderr

        result = invoke(runner, db_path, "purge", "--yes")
        assert result.stdout.strip() == "Deleted 2 article(s)."
        assert invoke(runner, db_path, "list").stdout.strip() == "No articles."

    @pytest.mark.integration
    def test_owners_are_isolated(self, runner: CliRunner, db_path: Path) -> None:
        """Test another owner does not see the collection."""
        save(runner, db_path, "https://note.com/alice/n/n1")

        result = runner.invoke(
            cli, ["--db", str(db_path), "--owner", "someone-else", "--no-json-logs", "list"]
        )

        assert result.stdout.strip() == "No articles."


class TestConfigAndOptions:
    """Tests for configuration handling."""

    @pytest.mark.integration
    def test_validate_config_valid(self, runner: CliRunner, db_path: Path) -> None:
        """Test a valid engine.yaml is summarized."""
        result = invoke(
            runner, db_path, "validate-config", str(FIXTURES_DIR / "engine.yaml")
        )

        assert result.exit_code == 0
        assert "Configuration is valid!" in result.stdout
        assert "Queue size: 5" in result.stdout
        assert "Freshness decay: 45.0 days" in result.stdout

    @pytest.mark.integration
    def test_validate_config_invalid(self, runner: CliRunner, db_path: Path) -> None:
        """Test errors are listed with hints."""
        result = invoke(
            runner, db_path, "validate-config", str(FIXTURES_DIR / "engine_invalid.yaml")
        )

        assert result.exit_code == 1
        assert "Configuration validation failed:" in result.stderr
        assert "queue.queue_sise" in result.stderr
        assert "scoring.priority_cap" in result.stderr
        assert "Hint:" in result.stderr
        assert not db_path.exists()

    @pytest.mark.integration
    def test_invalid_config_blocks_commands(
        self, runner: CliRunner, db_path: Path
    ) -> None:
        """Test commands refuse to run with an invalid engine.yaml."""
        result = invoke(
            runner,
            db_path,
            "--config",
            str(FIXTURES_DIR / "engine_invalid.yaml"),
            "list",
        )

        assert result.exit_code == 1

    @pytest.mark.integration
    def test_invalid_timezone(self, runner: CliRunner, db_path: Path) -> None:
        """Test unknown timezones exit with status 1."""
        result = invoke(runner, db_path, "--tz", "Mars/Olympus", "list")

        assert result.exit_code == 1
        assert "Invalid timezone" in result.stderr

    @pytest.mark.integration
    def test_stats_text(self, runner: CliRunner, db_path: Path) -> None:
        """Test the text statistics report."""
        save(runner, db_path, "https://note.com/alice/n/n1")

        result = invoke(runner, db_path, "--tz", "Asia/Tokyo", "stats")

        assert result.exit_code == 0
        assert "Reading Statistics" in result.stdout
        assert "Read: 0 / 1" in result.stdout
        assert "focus: 1" in result.stdout
