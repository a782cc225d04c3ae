"""LLM environment for LMIQ."""

from .models import (
    Message,
    Role,
    PromptFormat,
    LLMResponse,
    ParsedResponse,
    EvaluationResult,
    ModelConfig,
    BenchmarkConfig,
    ModelSummary,
    BenchmarkResult,
)
from .llm_client import LLMClient
from .agent import MazeAgent
from .mazebench import MazeBench

__all__ = [
    "Message",
    "Role",
    "PromptFormat",
    "LLMResponse",
    "ParsedResponse",
    "EvaluationResult",
    "ModelConfig",
    "BenchmarkConfig",
    "ModelSummary",
    "BenchmarkResult",
    "LLMClient",
    "MazeAgent",
    "MazeBench",
]
