"""Unit tests for the command-line entry point (modgen.command).

Tests cover:
- build_parser: sub-command, options, repeated --modules, -n
- run: non-interactive success and failure exit codes
- run: confirmation and abort in interactive sessions, end of input
  and Ctrl-C, existing bundle directory warning
- run: render failures reported after every step ran
- main: argv parsing through to run
"""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from modgen.command import OPTION_FIELDS, build_parser, main, run
from modgen.config import GeneratorConfig
from modgen.exceptions import RenderError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _argv(options: dict) -> list[str]:
    """Turn an options dict into ``generate:module -n`` arguments."""
    argv = ["generate:module", "-n"]
    for name, value in options.items():
        flag = "--" + name.replace("_", "-")
        if name == "modules":
            for record in value:
                argv.append(f"{flag}={record}")
        elif value is not None:
            argv.append(f"{flag}={value}")
    return argv


def _mock_renderer() -> MagicMock:
    renderer = MagicMock()
    renderer.render_to_file.side_effect = lambda template, path, context: path
    renderer.copy.side_effect = lambda asset, path: path
    renderer.remove.return_value = False
    return renderer


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


class TestBuildParser:
    @pytest.mark.unit
    def test_all_options_parsed(self, operation_options: dict):
        args = build_parser().parse_args(_argv(operation_options))
        assert args.command == "generate:module"
        assert args.no_interaction is True
        for name in OPTION_FIELDS:
            assert getattr(args, name) == operation_options[name]

    @pytest.mark.unit
    def test_modules_repeatable(self):
        args = build_parser().parse_args(
            ["generate:module", "--modules", "twitter::A", "--modules", ":b:B"]
        )
        assert args.modules == ["twitter::A", ":b:B"]

    @pytest.mark.unit
    def test_defaults_are_none(self):
        args = build_parser().parse_args(["generate:module"])
        assert args.no_interaction is False
        assert all(getattr(args, name) is None for name in OPTION_FIELDS)

    @pytest.mark.unit
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


class TestRunNonInteractive:
    @pytest.mark.unit
    def test_success(self, operation_options: dict, record_console: Console):
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()

        code = run(args, out=record_console, interactive=False,
                   config=GeneratorConfig(), renderer=renderer)

        assert code == 0
        text = record_console.file.getvalue()
        assert "acme-twitter" in text
        assert "created composer.json" in text
        assert "You can now start using the generated code!" in text

    @pytest.mark.unit
    def test_parameters_reach_renderer(self, operation_options: dict, record_console: Console):
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()
        run(args, out=record_console, interactive=False, config=GeneratorConfig(), renderer=renderer)

        calls = {c.args[0]: c.args[2] for c in renderer.render_to_file.call_args_list}
        job = calls["job/Job.php.j2"]
        assert job["class_name"] == "Twitter"
        assert job["metrics_for_operation"] == ["Clicks", "Likes"]
        assert job["route_prefix"] == "acme_operation_twitter"
        assert job["bundle_class_name"] == "AcmeOperationTwitterBundle"

    @pytest.mark.unit
    @pytest.mark.parametrize("field", ["author_name", "namespace"])
    def test_missing_option(self, operation_options: dict, record_console: Console, field: str):
        operation_options[field] = None
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()

        code = run(args, out=record_console, interactive=False,
                   config=GeneratorConfig(), renderer=renderer)

        assert code == 1
        assert f'Error: The "{field}" option must be provided' in record_console.file.getvalue()
        renderer.render_to_file.assert_not_called()

    @pytest.mark.unit
    def test_invalid_option(self, operation_options: dict, record_console: Console):
        operation_options["namespace"] = "TwitterBundle"
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()

        code = run(args, out=record_console, interactive=False,
                   config=GeneratorConfig(), renderer=renderer)

        assert code == 1
        assert "vendor namespace" in record_console.file.getvalue()
        renderer.render_to_file.assert_not_called()

    @pytest.mark.unit
    def test_render_failures_reported(self, operation_options: dict, record_console: Console):
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()

        def _render(template, path, context):
            if template == "config/composer.json.j2":
                raise RenderError(template, "missing parameter (package_name)")
            return path

        renderer.render_to_file.side_effect = _render
        code = run(args, out=record_console, interactive=False,
                   config=GeneratorConfig(), renderer=renderer)

        assert code == 1
        text = record_console.file.getvalue()
        assert "The command was not able to configure everything" in text
        assert "config/composer.json.j2" in text
        # Later steps still ran
        assert "created Resources/config/routing.yml" in text
        assert "You can now start using the generated code!" not in text


class TestRunInteractive:
    @pytest.mark.unit
    def test_confirmed(self, operation_options: dict, record_console: Console):
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()

        code = run(args, out=record_console, stream=io.StringIO("yes\n"), interactive=True,
                   config=GeneratorConfig(), renderer=renderer)

        assert code == 0
        assert renderer.render_to_file.called

    @pytest.mark.unit
    def test_aborted(self, operation_options: dict, record_console: Console):
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()

        code = run(args, out=record_console, stream=io.StringIO("no\n"), interactive=True,
                   config=GeneratorConfig(), renderer=renderer)

        assert code == 1
        assert "Error: Command aborted" in record_console.file.getvalue()
        renderer.render_to_file.assert_not_called()

    @pytest.mark.unit
    def test_end_of_input_aborts(self, record_console: Console):
        args = build_parser().parse_args(["generate:module"])
        renderer = _mock_renderer()

        code = run(args, out=record_console, stream=io.StringIO(""), interactive=True,
                   config=GeneratorConfig(), renderer=renderer)

        assert code == 1
        assert "Error: Command aborted" in record_console.file.getvalue()
        renderer.render_to_file.assert_not_called()

    @pytest.mark.unit
    def test_keyboard_interrupt_aborts(self, operation_options: dict, record_console: Console):
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()

        with patch("modgen.command.InputCollector.collect", side_effect=KeyboardInterrupt):
            code = run(args, out=record_console, interactive=True,
                       config=GeneratorConfig(), renderer=renderer)

        assert code == 1
        assert "Error: Command aborted" in record_console.file.getvalue()
        renderer.render_to_file.assert_not_called()

    @pytest.mark.unit
    def test_existing_bundle_dir_warned(self, operation_options: dict, record_console: Console):
        args = build_parser().parse_args(_argv(operation_options))
        bundle_dir = Path(operation_options["dir"]).resolve() / "Acme/Operation/TwitterBundle"
        bundle_dir.mkdir(parents=True)

        code = run(args, out=record_console, stream=io.StringIO("yes\n"), interactive=True,
                   config=GeneratorConfig(), renderer=_mock_renderer())

        assert code == 0
        assert "Existing files will be overwritten in" in record_console.file.getvalue()

    @pytest.mark.unit
    def test_no_interaction_flag_wins_over_tty(self, operation_options: dict, record_console: Console):
        args = build_parser().parse_args(_argv(operation_options))
        renderer = _mock_renderer()
        with patch("modgen.command.sys.stdin") as stdin:
            stdin.isatty.return_value = True
            code = run(args, out=record_console, config=GeneratorConfig(), renderer=renderer)
        assert code == 0
        assert "Do you confirm generation?" not in record_console.file.getvalue()


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------


class TestMain:
    @pytest.mark.unit
    def test_main_delegates_to_run(self, operation_options: dict):
        with patch("modgen.command.run", return_value=0) as mock_run:
            assert main(_argv(operation_options)) == 0
        args = mock_run.call_args.args[0]
        assert args.vendor_name == "Acme"

    @pytest.mark.unit
    def test_main_writes_bundle(self, operation_options: dict, tmp_path: Path):
        with patch.dict("os.environ", {}, clear=True):
            with patch("modgen.command.console", Console(file=io.StringIO())):
                code = main(_argv(operation_options))
        assert code == 0
        assert (tmp_path / "src" / "Acme" / "Operation" / "TwitterBundle" / "composer.json").is_file()
