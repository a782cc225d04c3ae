"""
Pydantic models for the environment layer.

This module contains the data models (configurations, results, parsed responses)
used throughout the environment layer. The main logic classes (MazeAgent,
LLMClient, MazeBench) remain in their respective files.
"""

from typing import List, Dict, Optional, Literal
from pydantic import BaseModel, Field, ConfigDict

from ..maze.models import Position
from ..verifiers.models import ValidationError, ValidationResult
from ..verifiers.outcome import EvaluationOutcome


# Type aliases
Role = Literal["system", "user", "assistant"]
PromptFormat = Literal["ascii", "adjacency"]


class Message(BaseModel):
    """Represents a single message in the conversation."""
    role: Role
    content: str


class LLMResponse(BaseModel):
    """Text and usage returned by one completion call."""
    content: str = ""
    finish_reason: Optional[str] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class ParsedResponse(BaseModel):
    """Parsed components from an LLM response."""
    reasoning: Optional[str] = None
    moves: List[str] = Field(default_factory=list)
    parse_errors: List[ValidationError] = Field(default_factory=list)
    raw_response: str = ""


class EvaluationResult(BaseModel):
    """Result of one model attempting one maze."""
    model: str
    agent_id: str
    agent_name: str
    maze_id: str
    difficulty: str
    trial: int = 1
    outcome: EvaluationOutcome
    prompt: str = ""
    prompt_formats: List[PromptFormat] = Field(default_factory=list)
    raw_response: str = ""
    reasoning: Optional[str] = None
    parsed_moves: Optional[List[str]] = None
    parse_errors: List[ValidationError] = Field(default_factory=list)
    validation: Optional[ValidationResult] = None
    moves_executed: Optional[int] = None
    final_position: Optional[Position] = None
    shortest_path: int = 0
    efficiency: Optional[float] = None
    finish_reason: Optional[str] = None
    error: Optional[str] = None
    started_at: str = ""
    completed_at: str = ""
    inference_seconds: float = 0.0
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @property
    def key(self) -> str:
        """Identity of the (model, maze, trial) attempt, used when resuming."""
        return f"{self.agent_id}|{self.maze_id}|{self.trial}"


class ModelConfig(BaseModel):
    """Configuration for a single model under test."""
    model_config = ConfigDict(extra='allow', protected_namespaces=())

    model: str
    name: Optional[str] = None
    temperature: float = 1.0
    max_tokens: Optional[int] = None
    # Additional kwargs are allowed and passed to LiteLLM


class BenchmarkConfig(BaseModel):
    """Configuration for a benchmark run."""
    test_set: str
    models: List[ModelConfig] = Field(default_factory=lambda: [ModelConfig(model="gpt-4o")])
    difficulties: Optional[List[str]] = None
    prompt_formats: List[PromptFormat] = Field(default_factory=lambda: ["ascii"])
    trials: int = Field(default=1, ge=1)
    max_mazes_per_difficulty: Optional[int] = Field(default=None, ge=1)


class ModelSummary(BaseModel):
    """Aggregate scores for one model across a run."""
    agent_id: str
    model: str
    name: str
    evaluations: int = 0
    outcomes: Dict[str, int] = Field(default_factory=dict)
    success_rate: float = 0.0
    mean_efficiency: Optional[float] = None
    by_difficulty: Dict[str, Dict[str, int]] = Field(default_factory=dict)
    total_tokens: int = 0


class BenchmarkResult(BaseModel):
    """Result of a complete benchmark run."""
    config: BenchmarkConfig
    test_set_id: str = ""
    test_set_name: str = ""
    evaluations: List[EvaluationResult] = Field(default_factory=list)
    summaries: Dict[str, ModelSummary] = Field(default_factory=dict)
    end_reason: str = ""
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
    total_prompt_tokens: int = 0
    total_completion_tokens: int = 0
    total_tokens: int = 0
