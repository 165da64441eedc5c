"""Tests for match_news.cli module."""

import json
from unittest.mock import patch

from common.config import Config
from common.errors import NotFound, PersistenceError
from match_news.cli import main


class TestMain:
    @patch("match_news.cli.match_news_candidate")
    @patch("match_news.cli.get_session")
    @patch("match_news.cli.load_config")
    def test_single_candidate(self, mock_config, mock_session, mock_match, capsys) -> None:
        mock_config.return_value = Config()
        mock_match.return_value = {"success": False, "message": "No suitable article match found", "threshold": 15}

        assert main(["--candidate-id", "news-1"]) == 0

        assert json.loads(capsys.readouterr().out) == {
            "candidateId": "news-1",
            "success": False,
            "message": "No suitable article match found",
            "threshold": 15,
        }

    @patch("match_news.cli.match_unmatched_candidates")
    @patch("match_news.cli.get_session")
    @patch("match_news.cli.load_config")
    def test_unmatched_batch(self, mock_config, mock_session, mock_batch, capsys) -> None:
        mock_config.return_value = Config()
        mock_batch.return_value = [{"candidateId": "a", "success": True}, {"candidateId": "b", "success": True}]

        assert main(["--unmatched", "--limit", "2"]) == 0

        assert mock_batch.call_args.kwargs["limit"] == 2
        assert len(capsys.readouterr().out.splitlines()) == 2

    @patch("match_news.cli.match_news_candidate")
    @patch("match_news.cli.get_session")
    @patch("match_news.cli.load_config")
    def test_missing_candidate_returns_error(self, mock_config, mock_session, mock_match, capsys) -> None:
        mock_config.return_value = Config()
        mock_match.side_effect = NotFound("News candidate missing not found")

        assert main(["--candidate-id", "missing"]) == 1
        assert json.loads(capsys.readouterr().out)["success"] is False

    @patch("match_news.cli.match_news_candidate")
    @patch("match_news.cli.get_session")
    @patch("match_news.cli.load_config")
    def test_write_failure_returns_error(self, mock_config, mock_session, mock_match, capsys) -> None:
        mock_config.return_value = Config()
        mock_match.side_effect = PersistenceError("Failed to store match for news-1: database is locked")

        assert main(["--candidate-id", "news-1"]) == 1
        assert json.loads(capsys.readouterr().out) == {
            "success": False,
            "error": "Failed to store match for news-1: database is locked",
        }
