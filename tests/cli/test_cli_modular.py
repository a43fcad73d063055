import pytest
import structlog

from byline_normalizer.cli import cli_modular


@pytest.fixture
def quiet_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(
        cli_modular, "setup_logging", lambda **kwargs: calls.append(kwargs)
    )
    return calls


def test_main_without_command_prints_help(quiet_logging, capsys):
    assert cli_modular.main([]) == 1

    assert "usage: byline-normalizer" in capsys.readouterr().out
    assert quiet_logging == []


def test_main_routes_to_handler_and_configures_logging(quiet_logging, monkeypatch):
    seen = {}

    def fake_handler(args):
        seen["byline"] = args.byline
        return 7

    monkeypatch.setitem(cli_modular.COMMAND_HANDLERS, "redundant", fake_handler)

    result = cli_modular.main(["--log-level", "DEBUG", "redundant", "Joe Wee", "Code"])

    assert result == 7
    assert seen == {"byline": "Joe Wee"}
    assert quiet_logging == [{"level": "DEBUG", "service_name": "byline-normalizer"}]


def test_handler_runs_inside_command_context(quiet_logging, monkeypatch):
    seen = {}

    def fake_handler(args):
        seen.update(structlog.contextvars.get_contextvars())
        return 0

    monkeypatch.setitem(cli_modular.COMMAND_HANDLERS, "check-url", fake_handler)

    assert cli_modular.main(["check-url", "https://example.com"]) == 0

    assert seen["command"] == "check-url"
    assert len(seen["run_id"]) == 12
    assert "command" not in structlog.contextvars.get_contextvars()


def test_parser_registers_every_command():
    parser = cli_modular.create_parser()

    for command in cli_modular.COMMAND_HANDLERS:
        args = parser.parse_args(
            [command, "x", "y"] if command == "redundant" else [command, "x"]
        )
        assert args.command == command


def test_unknown_command_exits(quiet_logging):
    with pytest.raises(SystemExit):
        cli_modular.main(["frobnicate"])
