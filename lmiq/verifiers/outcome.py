"""Outcome classification for evaluated model responses."""

from typing import List, Literal, Optional

from .models import ValidationResult


EvaluationOutcome = Literal[
    "success",
    "failure",
    "invalid_move",
    "constraint_violated",
    "parse_error",
    "empty_response",
    "token_limit",
    "api_error",
]

# Outcomes worth re-running against the model
RETRYABLE_OUTCOMES: List[str] = [
    "empty_response",
    "token_limit",
    "parse_error",
    "failure",
    "invalid_move",
    "api_error",
    "constraint_violated",
]


def classify_validation(validation: ValidationResult) -> EvaluationOutcome:
    """
    Map a validation verdict to an outcome.

    Precedence:
    - Illegal move → invalid_move
    - Goal reached with a violated constraint → constraint_violated
    - Goal reached otherwise → success
    - Anything else → failure
    """
    if not validation.is_valid:
        return "invalid_move"
    if validation.reaches_goal:
        if validation.constraints_satisfied is False:
            return "constraint_violated"
        return "success"
    return "failure"


def classify_response(
    raw_response: str,
    finish_reason: Optional[str] = None,
    has_parse_errors: bool = False,
    validation: Optional[ValidationResult] = None,
) -> EvaluationOutcome:
    """
    Classify a full response, before or after validation.

    An empty response is a token_limit when the model stopped for length,
    otherwise empty_response. Unparseable moves are a parse_error. Only
    parsed, validated moves reach classify_validation.
    """
    if not raw_response or not raw_response.strip():
        return "token_limit" if finish_reason == "length" else "empty_response"
    if has_parse_errors or validation is None:
        return "parse_error"
    return classify_validation(validation)
