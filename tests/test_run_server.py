import re

import run_server


def test_main_starts_uvicorn_with_the_app(monkeypatch):
    calls = []
    monkeypatch.setattr(run_server.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    run_server.main()

    assert len(calls) == 1
    args, kwargs = calls[0]
    assert args == ("inkstudio.main:app",)
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8000
    assert kwargs["reload"] is False


def test_server_and_web_stack_are_declared():
    from importlib.metadata import requires

    declared = {re.split(r"[\[<>=;\s]", req, maxsplit=1)[0].lower() for req in requires("inkstudio")}

    assert {"fastapi", "starlette", "uvicorn", "sqlalchemy", "pydantic", "python-dotenv"} <= declared
