# =============================================================================
# GITPACK CLI TESTS
# =============================================================================
# Tests for argument handling and exit statuses.
# =============================================================================

import os
from unittest.mock import patch

import pytest

from gitpack.domain.models import Command, RefSpec
from gitpack.main import build_parser, main


class TestParser:
    """Test the argparse surface."""

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-h"])
        assert exc_info.value.code == 0
        assert "add|rm" in capsys.readouterr().out

    def test_help_wins_over_other_arguments(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["add", "bad-target", "--help"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("argv", [[], ["add"], ["install", "owner/repo"]])
    def test_missing_or_unknown_arguments(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code != 0

    def test_token_option(self):
        args = build_parser().parse_args(["--token", "abc", "rm", "owner/repo"])
        assert args.token == "abc"
        assert args.command == "rm"
        assert args.target == "owner/repo"


class TestMain:
    """Test main() dispatch to the Tool."""

    @patch("gitpack.main.Tool")
    def test_malformed_target_no_network(self, mock_tool, capsys):
        """A bad refspec fails before the Tool is ever built."""
        assert main(["add", "invalid"]) == 1
        mock_tool.assert_not_called()
        assert "Usage: gitpack" in capsys.readouterr().out

    @pytest.mark.parametrize("target", ["owner/repo@ ", "owner/ ", " /repo"])
    @patch("gitpack.main.Tool")
    def test_blank_target_parts_are_usage_errors(self, mock_tool, target, capsys):
        """Parts that are only whitespace give exit 1 and the usage line."""
        assert main(["add", target]) == 1
        mock_tool.assert_not_called()
        assert "Usage: gitpack" in capsys.readouterr().out

    @patch("gitpack.main.Tool")
    def test_success_exit_zero(self, mock_tool):
        mock_tool.return_value.run.return_value = True

        with patch.dict(os.environ, {}, clear=True):
            assert main(["--token", "abc", "add", "owner/repo@dev"]) == 0

        config = mock_tool.call_args.args[0]
        assert config.token == "abc"
        assert config.prefix == "/usr/local"
        mock_tool.return_value.run.assert_called_once_with(
            Command.ADD, RefSpec(owner="owner", name="repo", ref="dev")
        )

    @patch("gitpack.main.Tool")
    def test_failure_exit_one(self, mock_tool):
        mock_tool.return_value.run.return_value = False
        assert main(["rm", "owner/repo"]) == 1
        assert mock_tool.return_value.run.call_args.args[0] is Command.RM

    @patch("gitpack.main.Tool")
    def test_prefix_from_env_and_flag(self, mock_tool):
        mock_tool.return_value.run.return_value = True

        with patch.dict(os.environ, {"GITPACK_PREFIX": "/opt"}, clear=True):
            main(["add", "owner/repo"])
            assert mock_tool.call_args.args[0].prefix == "/opt"

            main(["--prefix", "/srv", "add", "owner/repo"])
            assert mock_tool.call_args.args[0].prefix == "/srv"

    @patch("gitpack.main.Tool")
    def test_invalid_environment(self, mock_tool):
        with patch.dict(os.environ, {"GITPACK_MAX_REDIRECTS": "many"}, clear=True):
            assert main(["add", "owner/repo"]) == 1
        mock_tool.assert_not_called()
