import pytest

import geoprims.__main__ as cli
from geoprims import config
from geoprims.config import FormatConfig


@pytest.fixture(autouse=True)
def _restore_format_config(monkeypatch):
    monkeypatch.setattr(config, "_FORMAT_CONFIG", FormatConfig())


def test_main_runs_expressions(capsys):
    cli.main(["-e", "distance point(0 0) point(3 4)", "-e", "intersect line(0 0, 1 0) line(1 -1, 0 1)"])
    out = capsys.readouterr().out
    assert out.splitlines() == ["5", "point (1 0)"]


def test_main_reads_query_files(tmp_path, capsys):
    path = tmp_path / "queries.txt"
    path.write_text(
        "# circles\nintersect circle(0 0, 1) circle(5 0, 1)\nclosest point(3 4) circle(0 0, 1)\n",
        encoding="utf-8",
    )
    cli.main([str(path), "--precision", "2"])
    assert capsys.readouterr().out.splitlines() == ["none", "(3 4) (0.6 0.8)"]


def test_main_applies_precision(capsys):
    cli.main(["--precision", "2", "-e", "distance point(0 0) point(1 1)"])
    assert capsys.readouterr().out.strip() == "1.41"


def test_main_exits_on_syntax_error(caplog):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-e", "distance point(0 0) blob(1 1)"])
    assert excinfo.value.code == 1
    assert any("unknown shape" in record.getMessage() for record in caplog.records)


def test_main_exits_on_unsupported_pair():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-e", "intersect ray(0 0 0, 1 0 0) ray(0 1 0, 1 0 0)"])
    assert excinfo.value.code == 1


def test_main_requires_queries():
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2


def test_main_prints_formatted_results(monkeypatch, capsys):
    seen = []

    def _run_query(query):
        seen.append(query.operation)
        return 2.5

    monkeypatch.setattr(cli, "run_query", _run_query)
    cli.main(["-e", "closest point(0 0) point(1 1)"])
    assert seen == ["closest"]
    assert capsys.readouterr().out == "2.5\n"
