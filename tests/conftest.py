from __future__ import annotations

from pathlib import Path

import pytest

from templatecs.template_syntax.tokenization import DjangoTokenizer
from templatecs.types import Source
from templatecs.types import Tokenized
from templatecs.types import TokenStream

FIXTURES = Path(__file__).resolve().parent / "fixtures"

TEMPLATE_PATH = "templates/page.html"


@pytest.fixture(autouse=True)
def _plain_console(monkeypatch: pytest.MonkeyPatch) -> None:
    # Reporter output is compared as plain text.
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)


@pytest.fixture
def make_source():
    def _make(content: str, path: str = TEMPLATE_PATH) -> Source:
        return Source(content=content, real_path=f"/srv/app/{path}", display_path=path)

    return _make


@pytest.fixture
def tokenizer() -> DjangoTokenizer:
    return DjangoTokenizer()


@pytest.fixture
def stream(tokenizer, make_source):
    def _stream(content: str, path: str = TEMPLATE_PATH) -> TokenStream:
        result = tokenizer.tokenize(make_source(content, path))
        assert isinstance(result, Tokenized), result
        return result.stream

    return _stream


@pytest.fixture
def templates_dir() -> Path:
    return FIXTURES / "templates"
