"""
Tests for the MCP server entry point options.
"""

import os

import pytest

from chuk_live_sync.constants import BINDING_ENV_VAR, OUTPUT_DIR_ENV_VAR
from chuk_live_sync.server import build_parser, export_options


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so whatever export_options writes is undone afterwards
    for name in (BINDING_ENV_VAR, OUTPUT_DIR_ENV_VAR):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestServerOptions:
    """Tests for chuk-live-sync-mcp options."""

    def test_defaults(self) -> None:
        """stdio on port 8000 with nothing exported."""
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000

        export_options(args)
        assert BINDING_ENV_VAR not in os.environ
        assert OUTPUT_DIR_ENV_VAR not in os.environ

    def test_options_exported(self) -> None:
        """Binding and output directory reach the tool module via the environment."""
        args = build_parser().parse_args(
            ["--transport", "http", "--binding", "pkg.mod:connect", "--output-dir", "/tmp/out"]
        )
        export_options(args)

        assert args.transport == "http"
        assert os.environ[BINDING_ENV_VAR] == "pkg.mod:connect"
        assert os.environ[OUTPUT_DIR_ENV_VAR] == "/tmp/out"

    def test_bad_transport(self) -> None:
        """Unknown transports are a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--transport", "sse"])
        assert exc_info.value.code == 2
