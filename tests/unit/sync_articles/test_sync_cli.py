"""Tests for sync_articles.cli module."""

import json
from datetime import date
from unittest.mock import patch

from common.config import Config, SyncConfig, WordPressConfig
from common.errors import RemoteUnavailable
from sync_articles.cli import main
from sync_articles.models import SyncRunReport

RESPONSE = {
    "success": True,
    "results": {"synced": 1, "updated": 0, "duplicates": 0, "errors": []},
    "totalArticles": 1,
}


def _config() -> Config:
    return Config(
        wordpress=WordPressConfig(base_url="https://example.com/wp-json/wp/v2"),
        sync=SyncConfig(max_articles=25),
    )


class TestMain:
    @patch("sync_articles.cli.run_sync")
    @patch("sync_articles.cli.get_session")
    @patch("sync_articles.cli.load_config")
    def test_builds_request_from_args_and_config(self, mock_config, mock_session, mock_run, capsys) -> None:
        mock_config.return_value = _config()
        mock_run.return_value = RESPONSE

        assert main(["--start-date", "2024-03-01", "--dry-run"]) == 0

        request = mock_run.call_args.args[0]
        assert request.max_articles == 25
        assert request.start_date == date(2024, 3, 1)
        assert request.dry_run is True
        assert json.loads(capsys.readouterr().out) == RESPONSE

    @patch("sync_articles.cli.run_sync")
    @patch("sync_articles.cli.get_session")
    @patch("sync_articles.cli.load_config")
    def test_cli_max_articles_overrides_config(self, mock_config, mock_session, mock_run) -> None:
        mock_config.return_value = _config()
        mock_run.return_value = RESPONSE

        main(["--max-articles", "5"])

        assert mock_run.call_args.args[0].max_articles == 5

    @patch("sync_articles.cli.run_sync")
    @patch("sync_articles.cli.get_session")
    @patch("sync_articles.cli.load_config")
    def test_remote_failure_returns_error(self, mock_config, mock_session, mock_run, capsys) -> None:
        mock_config.return_value = _config()
        mock_run.side_effect = RemoteUnavailable("WordPress API error: 401 - Unauthorized", status_code=401)

        assert main([]) == 1
        assert json.loads(capsys.readouterr().out) == {
            "success": False,
            "error": "WordPress API error: 401 - Unauthorized",
        }

    @patch("sync_articles.cli.save_jsonl_records_local")
    @patch("sync_articles.cli.upload_jsonl_records_to_s3")
    @patch("sync_articles.cli.run_sync")
    @patch("sync_articles.cli.get_session")
    @patch("sync_articles.cli.load_config")
    def test_saves_reports(self, mock_config, mock_session, mock_run, mock_s3, mock_local) -> None:
        mock_config.return_value = _config()
        mock_run.return_value = RESPONSE

        main(["--load-s3", "--load-local", "--start-date", "2024-03-01"])

        (records, prefix), _ = mock_s3.call_args
        report = records[0]
        assert prefix == "sync_runs"
        assert isinstance(report, SyncRunReport)
        assert report.start_date == date(2024, 3, 1)
        assert report.max_articles == 25
        assert (report.synced, report.duplicates, report.total_articles) == (1, 0, 1)
        mock_local.assert_called_once_with([report], "sync_runs")

    @patch("sync_articles.cli.run_sync")
    @patch("sync_articles.cli.get_session")
    @patch("sync_articles.cli.load_config")
    def test_local_report_is_json_lines(self, mock_config, mock_session, mock_run, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        mock_config.return_value = _config()
        mock_run.return_value = RESPONSE

        main(["--load-local", "--start-date", "2024-03-01", "--end-date", "2024-03-31"])

        (path,) = (tmp_path / "output").glob("sync_runs_*.jsonl")
        record = json.loads(path.read_text())
        assert record["start_date"] == "2024-03-01"
        assert record["end_date"] == "2024-03-31"
        assert record["errors"] == []
        assert record["synced"] == 1
