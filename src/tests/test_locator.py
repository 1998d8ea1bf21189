from walkthrough.locator import PLAN_ANCHORS
from walkthrough.locator import REVIEW_ANCHORS
from walkthrough.locator import find_enclosing_open
from walkthrough.locator import locate_json_candidate

PLAN_JSON = '{"title": "T", "description": "D", "categories": []}'


def test_fenced_block_wins() -> None:
    text = f"Here it is:\n```JSON\n{PLAN_JSON}\n```\nand {{noise}}"
    assert locate_json_candidate(text) == PLAN_JSON


def test_empty_fenced_block_falls_through_to_braces() -> None:
    text = f"```json\n```\n{PLAN_JSON}"
    assert locate_json_candidate(text) == PLAN_JSON


def test_no_brace_returns_text_unchanged() -> None:
    text = "Sorry, I cannot help with that."
    assert locate_json_candidate(text) == text


def test_first_open_to_last_close() -> None:
    text = f"Plan follows. {PLAN_JSON} Hope this helps."
    assert locate_json_candidate(text) == PLAN_JSON


def test_truncated_without_any_close_returns_remainder() -> None:
    text = 'Answer: {"title": "T", "description": "D", "categories": [{"name": "A"'
    assert locate_json_candidate(text) == text[text.index("{") :]


def test_truncated_tail_after_last_close_is_kept() -> None:
    text = '{"title": "T", "description": "D", "categories": [{"name": "A"}, {"name": "B"'
    assert locate_json_candidate(text) == text


def test_span_with_all_anchors_is_not_relocated() -> None:
    text = 'Example {x} of output: {"title": "T", "description": "D", "categories": []}'
    assert locate_json_candidate(text) == text[text.index("{") :]


def test_relocates_to_object_enclosing_title() -> None:
    text = 'Use {braces} for {"title": "T", "description": "D"} carefully {"z": 1}'
    located = locate_json_candidate(text)
    assert located.startswith('{"title"')
    assert located.endswith('{"z": 1}')


def test_review_candidate_located_between_braces() -> None:
    text = 'Methods found: {"methods": [{"name": "Run", "source": "App"}]} Done.'
    assert locate_json_candidate(text, REVIEW_ANCHORS) == '{"methods": [{"name": "Run", "source": "App"}]}'


def test_anchor_matching_groups() -> None:
    assert PLAN_ANCHORS.matches(PLAN_JSON)
    assert PLAN_ANCHORS.matches('{"title": "T", "description": "D", "components": []}')
    assert not PLAN_ANCHORS.matches('{"title": "T", "categories": []}')


def test_find_enclosing_open_skips_closed_objects() -> None:
    text = '{"a": {"b": 1}, "title": "T"}'
    assert find_enclosing_open(text, text.index('"title"')) == 0
    assert find_enclosing_open('no braces "title"', 10) is None


def test_truncated_object_followed_by_prose_uses_brace_span() -> None:
    truncated = PLAN_JSON.replace("[]}", '[{"name": "A"}]')
    text = f"Here is the plan: {truncated}\nLet me know if you need more."
    assert locate_json_candidate(text) == truncated[: truncated.rindex("}") + 1]


def test_truncated_tail_inside_string_is_kept() -> None:
    text = '{"title": "T", "description": "D", "categories": [{"name": "A"}], "note": "ends with words'
    assert locate_json_candidate(text) == text
