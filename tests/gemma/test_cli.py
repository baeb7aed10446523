import json
import logging

import pytest

from gemma import cli
from gemma.llm import gemini_client


@pytest.fixture
def env(tmp_path, monkeypatch):
    """Isolate the CLI from any real .env file and API key."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.delenv("LOGGING_LEVEL", raising=False)
    return ["-env", str(tmp_path / "absent.env")]


@pytest.fixture
def gemini(monkeypatch, fake_client):
    """Route ``genai.Client(...)`` to a FakeClient answering with ``response``."""

    def _install(response=None, *, error=None):
        client = fake_client(response, error=error)
        client.api_keys = []

        def ctor(*, api_key):
            client.api_keys.append(api_key)
            return client

        monkeypatch.setattr(gemini_client.genai, "Client", ctor)
        return client

    return _install


@pytest.fixture
def files(write_file):
    return [
        "-prompt=" + write_file("prompt.txt", "Echo the input as JSON."),
        "-input=" + write_file("input.txt", "hello"),
    ]


def test_success_prints_json_to_stdout(env, files, gemini, fakes, capsys):
    client = gemini(fakes.text_response('{"message": "hello"}'))

    assert cli.main(files + env) == 0

    assert capsys.readouterr().out == '{\n  "message": "hello"\n}\n'
    assert client.api_keys == ["test-key"]
    assert client.models.calls[0]["model"] == "gemini-1.5-flash"
    assert client.closed == 1


def test_double_dash_flags_and_output_file(env, write_file, gemini, fakes, tmp_path):
    gemini(fakes.text_response('{"message":"hi"}'))
    out = tmp_path / "out.json"

    code = cli.main(
        [
            "--prompt",
            write_file("p.txt", "p"),
            "--input",
            write_file("i.txt", "i"),
            "--model",
            "gemini-2.0-flash",
            "--output",
            str(out),
        ]
        + env
    )

    assert code == 0
    assert json.loads(out.read_text(encoding="utf-8")) == {"message": "hi"}


def test_missing_required_flag_exits_1(env, write_file, capsys, caplog):
    with caplog.at_level(logging.ERROR, logger="gemma"):
        code = cli.main(["-prompt", write_file("p.txt", "p")] + env)

    assert code == 1
    assert "usage:" in capsys.readouterr().err
    assert any("[config]" in r.getMessage() for r in caplog.records)


def test_missing_api_key_exits_1(env, files, monkeypatch, gemini, caplog):
    monkeypatch.delenv("GEMINI_API_KEY")
    client = gemini()

    with caplog.at_level(logging.ERROR, logger="gemma"):
        assert cli.main(files + env) == 1

    assert client.api_keys == []
    assert any("GEMINI_API_KEY" in r.getMessage() for r in caplog.records)


def test_empty_api_key_exits_1(env, files, monkeypatch, gemini):
    monkeypatch.setenv("GEMINI_API_KEY", "  ")
    gemini()
    assert cli.main(files + env) == 1


def test_api_key_from_env_file(files, tmp_path, monkeypatch, gemini, fakes):
    monkeypatch.setenv("GEMINI_API_KEY", "from-process")
    env_file = tmp_path / "custom.env"
    env_file.write_text("GEMINI_API_KEY=from-file\n")
    client = gemini(fakes.text_response('{"message": "x"}'))

    assert cli.main(files + ["-env", str(env_file)]) == 0
    assert client.api_keys == ["from-file"]


def test_plain_and_schema_together_exit_1(env, files, write_file, gemini):
    client = gemini()
    schema = write_file("schema.json", '{"type": "object"}')

    assert cli.main(files + env + ["-plain", "-schema", schema]) == 1
    assert client.api_keys == []


def test_plain_mode(env, files, gemini, fakes, capsys):
    gemini(fakes.text_response("free text"))
    assert cli.main(files + env + ["-plain"]) == 0
    assert capsys.readouterr().out == "free text"


def test_zero_candidates_exit_1_and_no_output(env, files, gemini, fakes, tmp_path):
    client = gemini(fakes.Response([]))
    out = tmp_path / "out.json"

    assert cli.main(files + env + ["-output", str(out)]) == 1
    assert not out.exists()
    assert client.closed == 1


def test_bad_schema_type_exit_1_before_network(
    env, files, write_file, gemini, caplog
):
    client = gemini()
    schema = write_file(
        "schema.json",
        json.dumps({"type": "object", "properties": {"answer": {"type": "weird"}}}),
    )

    with caplog.at_level(logging.ERROR, logger="gemma"):
        assert cli.main(files + env + ["-schema", schema]) == 1

    assert client.api_keys == []
    assert client.models.calls == []
    messages = [r.getMessage() for r in caplog.records]
    assert any("[schema]" in m and "answer" in m for m in messages)


def test_provider_error_exit_1(env, files, gemini, caplog):
    gemini(error=RuntimeError("quota"))

    with caplog.at_level(logging.ERROR, logger="gemma"):
        assert cli.main(files + env) == 1

    assert any("[provider]" in r.getMessage() for r in caplog.records)


def test_diagnostic_survives_critical_log_level(env, files, gemini, caplog):
    gemini(error=RuntimeError("quota"))
    root = logging.getLogger()
    prior_root = root.level

    try:
        with caplog.at_level(logging.CRITICAL, logger="gemma"):
            assert cli.main(files + env + ["-log-level", "critical"]) == 1
    finally:
        root.setLevel(prior_root)

    assert any(
        r.levelno == logging.CRITICAL and "[provider]" in r.getMessage()
        for r in caplog.records
    )
