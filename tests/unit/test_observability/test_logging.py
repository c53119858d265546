"""Tests for structured logging configuration."""

import io
import json

from src.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_lines_carry_run_context(self) -> None:
        """Test JSON output includes bound run context."""
        output = io.StringIO()
        configure_logging(output=output)
        bind_run_context("run-1", owner_id="owner-1")

        get_logger().info("article_saved", component="library", article_id="a1")

        event = json.loads(output.getvalue())
        assert event["event"] == "article_saved"
        assert event["level"] == "info"
        assert event["run_id"] == "run-1"
        assert event["owner_id"] == "owner-1"
        assert event["article_id"] == "a1"
        assert "timestamp" in event

    def test_level_filtering_by_name(self) -> None:
        """Test messages below the configured level are dropped."""
        output = io.StringIO()
        configure_logging(level="warning", output=output)

        log = get_logger()
        log.info("ignored")
        log.warning("kept")

        lines = output.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "kept"

    def test_clear_run_context(self) -> None:
        """Test cleared context no longer appears."""
        output = io.StringIO()
        configure_logging(output=output)
        bind_run_context("run-2")
        clear_run_context()

        get_logger().info("after_clear")

        assert "run_id" not in json.loads(output.getvalue())

    def test_console_format(self) -> None:
        """Test the console renderer writes plain text."""
        output = io.StringIO()
        configure_logging(output=output, json_format=False)

        get_logger().info("store_opened", db_path="x.sqlite")

        text = output.getvalue()
        assert "store_opened" in text
        assert "db_path=x.sqlite" in text
