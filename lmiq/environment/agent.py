"""
Agent class for a single model under test.

Wraps the LLM client, builds the conversation for one maze and parses the
model's reply into moves.
"""

from typing import Optional, Any
from pydantic import BaseModel, ConfigDict

from .llm_client import LLMClient
from .models import LLMResponse, ParsedResponse
from .prompts import SYSTEM_PROMPT
from ..verifiers.parsing import extract_reasoning, parse_moves


class MazeAgent(BaseModel):
    """
    One model being benchmarked.

    Attributes:
        agent_id: Unique identifier for the agent
        name: Display name for the agent
        llm_client: LLM client used to query the model
        attempts: Number of mazes attempted so far
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    agent_id: str
    name: str = ""
    llm_client: Optional[LLMClient] = None
    attempts: int = 0

    def model_post_init(self, __context) -> None:
        """Set default name if not provided."""
        if not self.name:
            self.name = f"Agent {self.agent_id}"

    @classmethod
    def create(
        cls,
        agent_id: str,
        model: str,
        name: Optional[str] = None,
        temperature: float = 1.0,
        max_tokens: Optional[int] = None,
        **llm_kwargs: Any
    ) -> "MazeAgent":
        """
        Factory method to create an agent with an LLM client.

        Args:
            agent_id: Unique identifier for the agent
            model: LLM model name (e.g., "gpt-4o", "claude-3-opus")
            name: Optional display name
            temperature: LLM temperature setting
            max_tokens: Optional max tokens for responses
            **llm_kwargs: Additional arguments for the LLM client

        Returns:
            A new MazeAgent instance with configured LLM client
        """
        llm_client = LLMClient(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **llm_kwargs
        )

        return cls(
            agent_id=agent_id,
            name=name or model,
            llm_client=llm_client
        )

    @property
    def model(self) -> str:
        return self.llm_client.model if self.llm_client else ""

    def solve(self, prompt: str) -> LLMResponse:
        """
        Ask the model to solve one maze.

        Every maze is a fresh conversation: system prompt plus this prompt.

        Raises:
            ValueError: If the agent has no LLM client
        """
        if self.llm_client is None:
            raise ValueError(f"Agent {self.agent_id} has no LLM client")

        self.attempts += 1
        self.llm_client.clear_messages()
        self.llm_client.add_message("system", SYSTEM_PROMPT)
        self.llm_client.add_message("user", prompt)
        return self.llm_client.complete()

    @staticmethod
    def parse_response(response: str) -> ParsedResponse:
        """
        Parse an LLM response for reasoning and moves.

        Expected format:
        <reasoning>how the path was found</reasoning>
        <moves>RIGHT, DOWN, ...</moves>

        Args:
            response: Raw LLM response text

        Returns:
            ParsedResponse with extracted components
        """
        result = ParsedResponse(raw_response=response)
        if not response or not response.strip():
            return result

        result.reasoning = extract_reasoning(response)
        moves, errors = parse_moves(response)
        result.moves = moves
        result.parse_errors = errors
        return result
