import pytest

from swimlane_gen.mermaid_fmt import (
    mermaid_block,
    mm_circle_node,
    mm_diamond_node,
    mm_edge_label,
    mm_init,
    mm_label,
    mm_sanitize_id,
    mm_with_classes,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("step-001", "step-001"),
        ("step_001", "step_001"),
        ("step#001", "step_001"),
        ("actor@123!", "actor_123_"),
        ("two words", "two_words"),
        ("Zahlung-prüfen", "Zahlung-pr_fen"),
    ],
)
def test_sanitize_replaces_unsafe_characters(raw, expected):
    assert mm_sanitize_id(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("end", "node_end"),
        ("END", "node_END"),
        ("start", "node_start"),
        ("Subgraph", "node_Subgraph"),
        ("classDef", "node_classDef"),
        ("click", "node_click"),
        ("style", "node_style"),
    ],
)
def test_sanitize_prefixes_reserved_words(raw, expected):
    assert mm_sanitize_id(raw) == expected


def test_sanitize_keyword_match_is_exact():
    assert mm_sanitize_id("end!") == "end_"
    assert mm_sanitize_id("ending") == "ending"
    assert mm_sanitize_id("node_end") == "node_end"


def test_label_escapes_quotes_and_newlines():
    assert mm_label('Test "quoted" label') == "Test #quot;quoted#quot; label"
    assert mm_label("line one\nline two") == "line one<br/>line two"
    assert mm_label("a\r\nb\rc") == "a<br/>b<br/>c"


def test_edge_label_escapes_pipes():
    assert mm_edge_label("Yes | No") == "Yes #124; No"
    assert mm_edge_label('Say "ok"') == "Say #quot;ok#quot;"


def test_with_classes():
    assert mm_with_classes('a["x"]', []) == 'a["x"]'
    assert mm_with_classes('a["x"]', ["controlStyle"]) == 'a["x"]:::controlStyle'
    assert (
        mm_with_classes('a["x"]', ["controlStyle", "riskStyle"])
        == 'a["x"]:::controlStyle:riskStyle'
    )


def test_init_directive_is_stable_json():
    assert mm_init(theme="forest") == '%%{init:{"theme":"forest"}}%%'


def test_mermaid_block():
    assert mermaid_block("graph TB\n\n") == "```mermaid\ngraph TB\n```\n"


def test_node_labels_are_quoted_so_brackets_stay_literal():
    assert mm_circle_node("s", "Start (employee)") == 's(("Start (employee)"))'
    assert mm_diamond_node("d", "Amount {EUR} ok?") == 'd{"Amount {EUR} ok?"}'
    assert mm_diamond_node("d", 'Over "limit"?') == 'd{"Over #quot;limit#quot;?"}'
