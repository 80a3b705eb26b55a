import functools

import httpx

from tasksync.client import cli
from tasksync.logging_setup import configure_logging


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused")


def _answer(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=[{"id": 1, "title": "A", "status": "pending"}])


def run_main(monkeypatch, handler, argv):
    monkeypatch.setattr(
        cli,
        "run_view",
        functools.partial(cli.run_view, transport=httpx.MockTransport(handler)),
    )
    try:
        return cli.main(argv)
    finally:
        configure_logging()


def test_failure_logs_go_to_stderr_not_stdout(monkeypatch, capsys):
    code = run_main(monkeypatch, _refuse, ["--base-url", "http://test"])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == "Error: Connection refused\n"
    assert "task_list_request_failed" in captured.err


def test_success_prints_rows_only(monkeypatch, capsys):
    code = run_main(monkeypatch, _answer, ["--base-url", "http://test", "--log-level", "INFO"])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == "A - pending\n"
    assert "task_list_loaded" in captured.err
