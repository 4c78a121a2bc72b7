"""Tests for the command-line entry point."""
import io
import json

import pytest

from citesplice import cli
from citesplice.pipeline import CitationPipeline

from tests.builders import Cite, Header, Para, ScriptedEngine, citation, document


@pytest.fixture(autouse=True)
def quiet(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    monkeypatch.setenv("CITESPLICE_LOCALE_DIR", str(tmp_path))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def scripted(monkeypatch):
    monkeypatch.setattr(
        cli,
        "CitationPipeline",
        lambda config: CitationPipeline(
            config, engine_factory=lambda style, store, cfg: ScriptedEngine(store)
        ),
    )


def run(monkeypatch, text, argv=()):
    data = text if isinstance(text, bytes) else text.encode("utf-8")
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data), encoding="utf-8"))
    return cli.main(list(argv))


def test_success_writes_document(monkeypatch, capsys, scripted, bib_path):
    doc = document([Para(Cite(citation("doe2020"))), Header("Bibliography")], bibliography=str(bib_path))
    assert run(monkeypatch, json.dumps(doc)) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["blocks"][0]["c"][0] == {"t": "RawInline", "c": ["markdown", "(doe2020)"]}
    assert len(output["blocks"]) == 3


def test_unknown_item_writes_nothing(monkeypatch, capsys, scripted, bib_path):
    doc = document([Para(Cite(citation("ghost2000")))], bibliography=str(bib_path))
    assert run(monkeypatch, json.dumps(doc)) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert 'Item with ID "ghost2000" not found' in captured.err


def test_malformed_input(monkeypatch, capsys):
    assert run(monkeypatch, "{") == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "not valid JSON" in captured.err


def test_missing_style_file(monkeypatch, capsys, bib_path, tmp_path):
    doc = document([], csl=str(tmp_path / "missing.csl"), bibliography=str(bib_path))
    assert run(monkeypatch, json.dumps(doc)) == 1
    assert "CSL style file not found" in capsys.readouterr().err


def test_bad_log_level(monkeypatch, capsys):
    monkeypatch.setenv("CITESPLICE_LOG_LEVEL", "LOUD")
    assert run(monkeypatch, "{}") == 1
    assert "Unknown log level" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert "citesplice" in capsys.readouterr().out


def test_non_utf8_input(monkeypatch, capsys):
    assert run(monkeypatch, b'{"meta": "\xff\xfe"}') == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "not valid UTF-8" in captured.err


def test_output_is_utf8(monkeypatch, capsys, scripted, bib_path):
    doc = document([Para(Cite(citation("doe2020"))), Header("参考文献")], bibliography=str(bib_path))
    assert run(monkeypatch, json.dumps(doc, ensure_ascii=False)) == 0

    output = capsys.readouterr().out
    assert '"参考文献"' in output
    assert json.loads(output)["blocks"][2]["t"] == "Para"
