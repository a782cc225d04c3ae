"""Solution verification for LMIQ."""

from .validate import validate_solution, validate_maze_solution, contains_subsequence
from .models import ValidationError, ValidationResult
from .parsing import parse_moves, extract_moves_content, extract_reasoning
from .outcome import EvaluationOutcome, RETRYABLE_OUTCOMES, classify_validation, classify_response

__all__ = [
    # Main validation
    "validate_solution",
    "validate_maze_solution",
    "contains_subsequence",
    # Models
    "ValidationError",
    "ValidationResult",
    # Parsing
    "parse_moves",
    "extract_moves_content",
    "extract_reasoning",
    # Outcomes
    "EvaluationOutcome",
    "RETRYABLE_OUTCOMES",
    "classify_validation",
    "classify_response",
]
