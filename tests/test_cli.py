import logging

import pytest

from museum_insights import cli


@pytest.fixture(autouse=True)
def _reset_package_logger():
    logger = logging.getLogger("museum_insights")
    yield
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

def test_cli_prints_extrema(raw_csv, capsys):
    assert cli.main([str(raw_csv), "--by", "state"]) == 0
    out = capsys.readouterr().out
    assert "The highest total revenue is $5,300.00, held by the state MA." in out
    assert "The lowest number of museums is 1, held by the states NY and TX (tied)." in out
    assert "zero income and zero revenue: 1" in out

def test_cli_max_only(raw_csv, capsys):
    assert cli.main([str(raw_csv), "--direction", "max"]) == 0
    out = capsys.readouterr().out
    assert "highest" in out and "lowest" not in out

def test_cli_writes_outputs(raw_csv, tmp_path):
    out_dir = tmp_path / "out"
    assert cli.main([str(raw_csv), "--out", str(out_dir)]) == 0
    names = {p.name for p in out_dir.iterdir()}
    assert {
        "summary_by_museum_type.csv",
        "count_by_museum_type.png",
        "count_share_by_museum_type.png",
        "revenue_share_by_museum_type.png",
        "income_vs_revenue.png",
        "average_income_vs_revenue_by_museum_type.png",
    } <= names

def test_cli_llm_summary(raw_csv, capsys, monkeypatch):
    monkeypatch.setattr("museum_insights.openai_llm.openai_llm_call", lambda prompt: "A short summary.")
    assert cli.main([str(raw_csv), "--llm"]) == 0
    assert capsys.readouterr().out.rstrip().endswith("A short summary.")

def test_cli_bad_csv_exits_2(tmp_path):
    p = tmp_path / "bad.csv"
    p.write_text("Museum ID,Income\n1,2\n")
    assert cli.main([str(p)]) == 2

def test_cli_all_rows_dropped_exits_2(tmp_path):
    p = tmp_path / "empty.csv"
    p.write_text("museum_id,legal_name,museum_type,city,state,zip_code,income,revenue\n"
                 "1,A,ART,Boston,MA,02115,-1,-1\n")
    assert cli.main([str(p)]) == 2

def test_cli_llm_failure_exits_2(raw_csv, monkeypatch):
    from openai import OpenAIError

    def failing_llm(prompt):
        raise OpenAIError("retries exhausted")

    monkeypatch.setattr("museum_insights.openai_llm.openai_llm_call", failing_llm)
    assert cli.main([str(raw_csv), "--llm"]) == 2
