import sys
import types
from pathlib import Path

import pytest


def pytest_configure():
    # This repo uses a src/ layout, so when running tests without an editable
    # install, we add <repo>/src to sys.path.
    repo_root = Path(__file__).resolve().parents[2]
    src_path = str(repo_root / "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


class FakePart:
    def __init__(self, text=None, function_call=None):
        self.text = text
        self.function_call = function_call


class FakeContent:
    def __init__(self, parts):
        self.parts = parts


class FakeCandidate:
    def __init__(self, parts):
        self.content = FakeContent(parts)


class FakeResponse:
    def __init__(self, candidates):
        self.candidates = candidates


class FakeModels:
    """Records generate_content calls and replays a canned response."""

    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls: list[dict] = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        return self._response


class FakeClient:
    def __init__(self, response=None, error=None):
        self.models = FakeModels(response=response, error=error)
        self.closed = 0

    def close(self):
        self.closed += 1


def text_response(*texts: str) -> FakeResponse:
    return FakeResponse([FakeCandidate([FakePart(text=t) for t in texts])])


@pytest.fixture
def fake_client():
    """Fixture: factory for a FakeClient answering with the given response."""

    def _factory(response=None, *, error=None):
        return FakeClient(response=response, error=error)

    return _factory


@pytest.fixture
def llm_factory():
    """Fixture: build an ``llm_factory`` that wraps a FakeClient in GeminiLLM.

    The returned factory exposes ``.client`` and ``.created`` for assertions.
    """

    from gemma.llm.base import LLMConfig
    from gemma.llm.gemini_client import GeminiLLM

    def _build(client):
        def factory(*, provider, model, api_key):
            factory.created.append((provider, model, api_key))
            return GeminiLLM(
                LLMConfig(provider=provider, model=model, api_key=api_key),
                client=client,
            )

        factory.client = client
        factory.created = []
        return factory

    return _build


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, content: str) -> str:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return str(p)

    return _write


@pytest.fixture
def fakes():
    """Fixture: the fake google-genai response shapes used by the tests."""

    return types.SimpleNamespace(
        Part=FakePart,
        Candidate=FakeCandidate,
        Response=FakeResponse,
        text_response=text_response,
    )
