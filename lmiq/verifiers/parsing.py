"""Move-list parsing utilities for model responses."""

import re
from typing import List, Optional, Tuple

from .models import ValidationError


MOVE_ALIASES = {
    "UP": "UP",
    "U": "UP",
    "DOWN": "DOWN",
    "D": "DOWN",
    "LEFT": "LEFT",
    "L": "LEFT",
    "RIGHT": "RIGHT",
    "R": "RIGHT",
}


def extract_moves_content(text: str) -> str:
    """Extract content from between <moves> and </moves> tags."""
    matches = re.findall(r'<moves>(.*?)</moves>', text, re.DOTALL | re.IGNORECASE)
    if matches:
        # Models sometimes restate the format before answering; the last block wins
        return matches[-1].strip()
    return text.strip()


def extract_reasoning(text: str) -> Optional[str]:
    """Extract content from between <reasoning> and </reasoning> tags."""
    match = re.search(r'<reasoning>(.*?)</reasoning>', text, re.DOTALL | re.IGNORECASE)
    if match:
        return match.group(1).strip()
    return None


def parse_moves(text: str) -> Tuple[List[str], List[ValidationError]]:
    """
    Parse a move list with error collection.

    Accepts UP/DOWN/LEFT/RIGHT or U/D/L/R, case-insensitive, separated by
    commas, whitespace, arrows or brackets.

    Returns a tuple of (moves, errors).
    """
    content = extract_moves_content(text)
    tokens = [t for t in re.split(r'[\s,;\[\]"\'>\-→]+', content) if t]

    moves: List[str] = []
    errors: List[ValidationError] = []

    if not tokens:
        errors.append(ValidationError(
            code="EMPTY_MOVES",
            message="No moves found in response"
        ))
        return moves, errors

    for i, token in enumerate(tokens):
        move = MOVE_ALIASES.get(token.upper())
        if move is None:
            errors.append(ValidationError(
                code="UNKNOWN_TOKEN",
                message=f"Unrecognised move '{token}'",
                move_index=i
            ))
            continue
        moves.append(move)

    return moves, errors
