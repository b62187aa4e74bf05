"""Tests for argument parsing, mode dispatch and the error boundary (cli/app.py).

Service construction and logging setup are replaced with in-memory
doubles — no scheme registration leaks out of these tests except in
:class:`TestBuildService`, which restores ``urllib`` state.
"""

from __future__ import annotations

import io
import os
import sys
from pathlib import Path
from typing import Any

import pytest
from conftest import FakeFetcher

from num_client.cli import app as app_module
from num_client.cli import exit_codes
from num_client.cli.app import cli, main, parse_options
from num_client.config import Settings
from num_client.core.models import WARM_UP_URIS, Options
from num_client.core.resolve_service import ResolveService
from num_client.exceptions import ArgumentError, ConfigurationError, OutputPathError
from num_client.infra import protocol_support


@pytest.fixture
def wired(monkeypatch: pytest.MonkeyPatch, fetcher: FakeFetcher) -> FakeFetcher:
    """Route ``main`` to an in-memory fetcher and skip logging setup."""
    for name in list(os.environ):
        if name.startswith("NUM_CLIENT_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(app_module, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(app_module, "_build_service", lambda settings: ResolveService(fetcher))
    return fetcher


# ---------------------------------------------------------------------------
# parse_options
# ---------------------------------------------------------------------------

class TestParseOptions:
    def test_no_flags(self) -> None:
        assert parse_options([]) == Options()

    def test_all_flags(self) -> None:
        options = parse_options(["-uri", "num.uk:1", "-verbose", "-output", "out.json"])
        assert options == Options(uri="num.uk:1", verbose=True, output="out.json")

    def test_flag_order_is_free(self) -> None:
        options = parse_options(["-verbose", "-output", "o", "-uri", "num.uk:1"])
        assert options.uri == "num.uk:1"
        assert options.verbose

    def test_unknown_flag(self) -> None:
        with pytest.raises(ArgumentError, match="-bogus"):
            parse_options(["-bogus"])

    @pytest.mark.parametrize("argv", [["-help"], ["-help", "-bogus"], ["-uri", "-help"]])
    def test_help_anywhere_sets_help(self, argv: list[str]) -> None:
        assert parse_options(argv) == Options(help=True)

    @pytest.mark.parametrize("argv", [["-uri"], ["-output"], ["-uri", "-verbose"]])
    def test_missing_value(self, argv: list[str]) -> None:
        with pytest.raises(ArgumentError, match="expected one argument"):
            parse_options(argv)


# ---------------------------------------------------------------------------
# -help / -version
# ---------------------------------------------------------------------------

class TestHelp:
    @pytest.mark.parametrize(
        "argv",
        [
            ["-help"],
            ["-uri", "num.uk:1", "-help"],
            ["-help", "-bogus"],
            ["-uri", "-help"],
        ],
    )
    def test_help_short_circuits(
        self,
        argv: list[str],
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def _must_not_build(settings: Settings) -> ResolveService:
            raise AssertionError("help must not build a resolver")

        monkeypatch.setattr(app_module, "_build_service", _must_not_build)

        code = main(argv)

        out = capsys.readouterr().out
        assert code == exit_codes.SUCCESS
        assert "-uri" in out
        assert "num://jo.smith@numexample.com:1/work" in out
        assert "module defaults to 0" in out

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["-version"])
        assert exc_info.value.code == 0
        assert "num-client" in capsys.readouterr().out


class TestArgumentErrors:
    @pytest.mark.parametrize("argv", [["-bogus"], ["-uri"], ["stray"]])
    def test_prints_usage_and_returns_general_error(
        self,
        argv: list[str],
        wired: FakeFetcher,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main(argv)

        captured = capsys.readouterr()
        assert code == exit_codes.GENERAL_ERROR
        assert "Error:" in captured.err
        assert "usage: num-client" in captured.err
        assert captured.out == ""
        assert wired.calls == []


# ---------------------------------------------------------------------------
# Mode dispatch
# ---------------------------------------------------------------------------

class TestSingleShot:
    def test_success(self, wired: FakeFetcher, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["-uri", "num.uk:1"])

        assert code == exit_codes.SUCCESS
        assert capsys.readouterr().out == '{"status":"ok"}\n'
        assert wired.calls == ["num.uk:1"]

    def test_verbose(self, wired: FakeFetcher, capsys: pytest.CaptureFixture[str]) -> None:
        main(["-uri", "num.uk:1", "-verbose"])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "loading..."
        assert lines[1] == '{"status":"ok"}'
        assert lines[2].startswith("Took  : ") and lines[2].endswith("s")
        assert lines[3] == "Done."

    def test_no_record(self, wired: FakeFetcher, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["-uri", "nothing.example:1"])

        captured = capsys.readouterr()
        assert code == exit_codes.NO_RECORD
        assert "No record available." in captured.err
        assert captured.out == ""

    def test_output_file(
        self, wired: FakeFetcher, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        target = tmp_path / "out.json"

        code = main(["-uri", "num.uk:1", "-output", str(target)])

        assert code == exit_codes.SUCCESS
        assert target.read_text(encoding="utf-8") == '{"status":"ok"}\n'
        assert capsys.readouterr().out == ""

    def test_bad_output_path_raises_before_resolution(
        self, wired: FakeFetcher, tmp_path: Path,
    ) -> None:
        with pytest.raises(OutputPathError):
            main(["-uri", "num.uk:1", "-output", str(tmp_path / "no" / "out.json")])
        assert wired.calls == []


class TestInteractiveDispatch:
    def test_without_uri_runs_interactive(
        self, wired: FakeFetcher, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        seen: dict[str, Any] = {}

        def _fake_interactive(options: Options, service: ResolveService, **kwargs: Any) -> int:
            seen["options"] = options
            seen.update(kwargs)
            return exit_codes.SUCCESS

        monkeypatch.setattr(app_module, "run_interactive", _fake_interactive)

        assert main(["-verbose"]) == exit_codes.SUCCESS
        assert seen["options"] == Options(verbose=True)
        assert tuple(seen["warm_up_uris"]) == WARM_UP_URIS

    def test_warm_up_can_be_disabled(
        self, wired: FakeFetcher, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        seen: dict[str, Any] = {}
        monkeypatch.setenv("NUM_CLIENT_WARM_UP", "false")
        monkeypatch.setattr(
            app_module,
            "run_interactive",
            lambda options, service, **kwargs: seen.update(kwargs) or exit_codes.SUCCESS,
        )

        main([])

        assert seen["warm_up_uris"] is None

    def test_scripted_session(
        self,
        wired: FakeFetcher,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("NUM_CLIENT_WARM_UP", "false")
        monkeypatch.setattr(sys, "stdin", io.StringIO("num.uk:1\nquit\n"))

        assert main([]) == exit_codes.SUCCESS
        assert wired.calls == ["num.uk:1"]
        assert '{"status":"ok"}' in capsys.readouterr().out


class TestConfiguration:
    def test_invalid_settings_raise(
        self, wired: FakeFetcher, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("NUM_CLIENT_TIMEOUT", "-1")
        with pytest.raises(ConfigurationError, match="NUM_CLIENT_TIMEOUT"):
            main(["-uri", "num.uk:1"])
        assert wired.calls == []


@pytest.mark.usefixtures("clean_protocol_state")
class TestBuildService:
    def test_registers_scheme_once(self) -> None:
        service = app_module._build_service(Settings())

        assert isinstance(service, ResolveService)
        assert protocol_support.is_initialised()
        assert protocol_support.init() is False


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

class TestCliBoundary:
    def _run(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> int:
        def _raise() -> int:
            raise exc

        monkeypatch.setattr(app_module, "main", _raise)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return int(exc_info.value.code)

    def test_exit_code_from_main(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "main", lambda: exit_codes.NO_RECORD)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.NO_RECORD

    def test_domain_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run(monkeypatch, OutputPathError("Cannot open output file: x", hint="denied"))

        err = capsys.readouterr().err
        assert code == exit_codes.GENERAL_ERROR
        assert "Cannot open output file: x" in err
        assert "denied" in err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run(monkeypatch, RuntimeError("kaboom"))

        err = capsys.readouterr().err
        assert code == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError: kaboom" in err
        assert "Traceback" not in err

    def test_bad_output_path_end_to_end(
        self,
        wired: FakeFetcher,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
    ) -> None:
        monkeypatch.setattr(
            sys, "argv", ["num-client", "-uri", "num.uk:1", "-output", str(tmp_path / "x" / "y")],
        )
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert wired.calls == []
