import json
from pathlib import Path

from swimlane_gen.diagrams.summary import gen_controls_risks_summary


FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "process"


def load_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_summary_lists_controls_and_risks_with_steps():
    doc = load_json(FIXTURE_DIR / "expense_reimbursement.json")
    md = gen_controls_risks_summary(doc)

    assert "## Controls (3)" in md
    assert "## Risks (1)" in md
    assert (
        "| ctrl-001 | Preventive | Receipt attachment required | "
        "System enforces attachment of receipts for all expenses over $25 | "
        "Submit expense report with receipts |"
    ) in md
    assert (
        "| risk-001 | Medium | Fraudulent expense approval | "
        "Risk that manager approves inappropriate expenses | Review expense report |"
    ) in md


def test_detail_column_empty_when_it_repeats_description():
    doc = load_json(FIXTURE_DIR / "expense_reimbursement.json")
    md = gen_controls_risks_summary(doc)
    assert "| ctrl-003 | Preventive | Segregation of duties |  | Process payment |" in md


def test_summary_escapes_table_separators():
    doc = {
        "steps": [{"id": "s1", "label": "Check A|B", "controls": ["c1"], "risks": []}],
        "controls": [
            {"id": "c1", "type": "detective", "description": "Two\nlines", "detailedDescription": ""}
        ],
        "risks": [],
    }
    md = gen_controls_risks_summary(doc)
    assert "| c1 | Detective | Two lines |  | Check A\\|B |" in md
    assert "## Risks" not in md


def test_summary_empty_without_annotations():
    assert gen_controls_risks_summary({"controls": [], "risks": []}) == ""
