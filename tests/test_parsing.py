from lmiq.maze import Position
from lmiq.verifiers import (
    RETRYABLE_OUTCOMES,
    ValidationResult,
    classify_response,
    classify_validation,
    extract_moves_content,
    extract_reasoning,
    parse_moves,
)


class TestParseMoves:
    """Test cases for reading move lists out of responses."""

    def test_tagged_comma_list(self):
        moves, errors = parse_moves("<moves>RIGHT, DOWN, DOWN, LEFT</moves>")
        assert moves == ["RIGHT", "DOWN", "DOWN", "LEFT"]
        assert errors == []

    def test_short_forms_and_case(self):
        moves, errors = parse_moves("<moves>r d u l Right</moves>")
        assert moves == ["RIGHT", "DOWN", "UP", "LEFT", "RIGHT"]
        assert errors == []

    def test_arrow_separated(self):
        moves, _ = parse_moves("<moves>UP -> RIGHT → DOWN</moves>")
        assert moves == ["UP", "RIGHT", "DOWN"]

    def test_json_style_list(self):
        moves, errors = parse_moves('<moves>["UP", "LEFT"]</moves>')
        assert moves == ["UP", "LEFT"]
        assert errors == []

    def test_untagged_response(self):
        moves, errors = parse_moves("DOWN DOWN\nRIGHT")
        assert moves == ["DOWN", "DOWN", "RIGHT"]
        assert errors == []

    def test_last_moves_block_wins(self):
        text = "Format: <moves>UP, DOWN</moves>\n<reasoning>...</reasoning>\n<moves>LEFT</moves>"
        assert parse_moves(text)[0] == ["LEFT"]

    def test_unknown_token(self):
        moves, errors = parse_moves("<moves>UP, NORTH, DOWN</moves>")
        assert moves == ["UP", "DOWN"]
        assert len(errors) == 1
        assert errors[0].code == "UNKNOWN_TOKEN"
        assert errors[0].move_index == 1

    def test_empty_moves(self):
        moves, errors = parse_moves("<moves>  </moves>")
        assert moves == []
        assert errors[0].code == "EMPTY_MOVES"

    def test_prose_without_tags_fails(self):
        _, errors = parse_moves("I think you should go down twice.")
        assert errors


class TestExtraction:
    """Test cases for tag extraction."""

    def test_extract_moves_content(self):
        assert extract_moves_content("x <MOVES>\nUP\n</MOVES> y") == "UP"

    def test_extract_moves_content_without_tags(self):
        assert extract_moves_content("  UP DOWN  ") == "UP DOWN"

    def test_extract_reasoning(self):
        text = "<reasoning>\nFollow the left wall.\n</reasoning><moves>UP</moves>"
        assert extract_reasoning(text) == "Follow the left wall."

    def test_extract_reasoning_missing(self):
        assert extract_reasoning("<moves>UP</moves>") is None


def make_result(**kwargs):
    values = {"is_valid": True, "reaches_goal": True, "final_position": Position(1, 1)}
    values.update(kwargs)
    return ValidationResult(**values)


class TestClassifyValidation:
    """Test cases for mapping validation verdicts to outcomes."""

    def test_success(self):
        assert classify_validation(make_result()) == "success"

    def test_success_with_satisfied_constraint(self):
        assert classify_validation(make_result(constraints_satisfied=True)) == "success"

    def test_constraint_violated(self):
        assert classify_validation(make_result(constraints_satisfied=False)) == "constraint_violated"

    def test_invalid_move_takes_precedence(self):
        result = make_result(is_valid=False, reaches_goal=False, constraints_satisfied=False)
        assert classify_validation(result) == "invalid_move"

    def test_failure(self):
        assert classify_validation(make_result(reaches_goal=False)) == "failure"


class TestClassifyResponse:
    """Test cases for classifying whole responses."""

    def test_empty_response(self):
        assert classify_response("", finish_reason="stop") == "empty_response"
        assert classify_response("   \n") == "empty_response"

    def test_token_limit(self):
        assert classify_response("", finish_reason="length") == "token_limit"

    def test_parse_error(self):
        assert classify_response("<moves>NORTH</moves>", has_parse_errors=True) == "parse_error"

    def test_missing_validation_is_parse_error(self):
        assert classify_response("<moves>UP</moves>") == "parse_error"

    def test_validated(self):
        assert classify_response("<moves>UP</moves>", validation=make_result()) == "success"

    def test_retryable_outcomes(self):
        assert "success" not in RETRYABLE_OUTCOMES
        assert "api_error" in RETRYABLE_OUTCOMES
