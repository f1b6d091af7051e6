"""Tests for the command-line entry point."""

import pytest

from sidescroll_brawler.__main__ import build_parser


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.config == "default"
        assert args.seed is None
        assert args.sounds is None
        assert args.log_level == "INFO"

    def test_options(self):
        args = build_parser().parse_args(
            ["--config", "classic", "--seed", "7", "--log-level", "DEBUG"]
        )
        assert args.config == "classic"
        assert args.seed == 7
        assert args.log_level == "DEBUG"

    def test_unknown_preset_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--config", "nightmare"])
