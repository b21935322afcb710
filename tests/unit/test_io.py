from pathlib import Path

import pytest

from swimlane_gen.diagrams.swimlane import compile_process
from swimlane_gen.io import load_process
from swimlane_gen.validate import validate_process


FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "process"


def test_load_json_document():
    doc = load_process(FIXTURE_DIR / "expense_reimbursement.json")
    assert doc["processName"] == "Expense Reimbursement"
    assert len(doc["steps"]) == 6


def test_load_yaml_quotes_unquoted_colons(capsys):
    doc = load_process(FIXTURE_DIR / "purchase_request.yaml")
    assert doc["steps"][1]["label"] == "Raise request: item and cost"
    assert "after quoting 1 line(s)" in capsys.readouterr().err
    assert validate_process(doc) == []


def test_yaml_keyword_ids_compile_with_prefix():
    doc = load_process(FIXTURE_DIR / "purchase_request.yaml")
    code = compile_process(doc)
    assert 'node_start(("Start"))' in code
    assert 'node_end(("Order placed"))' in code
    assert "raise --> node_end" in code


def test_load_model_reply():
    doc = load_process(FIXTURE_DIR / "assistant_reply.md")
    assert doc["processName"] == "Leave Request"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_process(tmp_path / "nope.json")


def test_reply_without_document(tmp_path):
    path = tmp_path / "reply.md"
    path.write_text("No JSON here.", encoding="utf-8")
    with pytest.raises(ValueError, match="No process document"):
        load_process(path)


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"processName": ', encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to parse JSON"):
        load_process(path)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(TypeError, match="must be a mapping"):
        load_process(path)
