import json
from datetime import datetime
from pathlib import Path
from typing import List, Dict, Optional, Any, Callable, Tuple
from pydantic import BaseModel, Field, ConfigDict

from .agent import MazeAgent
from .models import BenchmarkConfig, BenchmarkResult, EvaluationResult, ModelSummary
from .prompts import build_maze_prompt
from ..maze.dataset import MazeRecord, TestSet
from ..verifiers.outcome import RETRYABLE_OUTCOMES, classify_response
from ..verifiers.validate import validate_maze_solution


class MazeBench(BaseModel):
    """
    Top-level orchestrator for maze benchmarks.

    Runs every configured model against every selected maze (for the
    configured number of trials), validates the answers and aggregates
    per-model scores.

    Attributes:
        test_set: The mazes being evaluated
        agents: One MazeAgent per configured model
        config: Benchmark configuration
        evaluations: Every evaluation recorded so far
        is_complete: Whether the benchmark has finished
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    test_set: Optional[TestSet] = None
    agents: List[MazeAgent] = Field(default_factory=list)
    config: BenchmarkConfig
    evaluations: List[EvaluationResult] = Field(default_factory=list)
    is_complete: bool = False
    end_reason: str = ""
    started_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        config: Optional[BenchmarkConfig] = None,
        test_set: Optional[TestSet] = None,
        **config_kwargs: Any
    ) -> "MazeBench":
        """
        Factory method to create a benchmark with its test set and agents.

        Args:
            config: Optional BenchmarkConfig instance
            test_set: Preloaded test set (loaded from config.test_set if omitted)
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured MazeBench instance
        """
        if config is None:
            config = BenchmarkConfig(**config_kwargs)

        if test_set is None:
            test_set = TestSet.load(config.test_set)

        return cls(test_set=test_set, agents=cls._create_agents(config), config=config)

    @classmethod
    def resume(cls, result_path: str | Path, test_set: Optional[TestSet] = None) -> "MazeBench":
        """
        Resume a benchmark from a saved result file.

        Evaluations already in the file are kept and skipped on the next run.

        Args:
            result_path: Path to the saved result JSON file
            test_set: Preloaded test set (loaded from the saved config if omitted)

        Returns:
            MazeBench instance restored to the saved state
        """
        result_path = Path(result_path)
        with open(result_path) as f:
            data = json.load(f)

        config = BenchmarkConfig(**data["config"])
        if test_set is None:
            test_set = TestSet.load(config.test_set)

        bench = cls(
            test_set=test_set,
            agents=cls._create_agents(config),
            config=config,
            evaluations=[EvaluationResult(**e) for e in data.get("evaluations", [])],
        )

        if data.get("started_at"):
            bench.started_at = datetime.fromisoformat(data["started_at"])

        for agent in bench.agents:
            agent.attempts = sum(1 for e in bench.evaluations if e.agent_id == agent.agent_id)

        return bench

    @staticmethod
    def _create_agents(config: BenchmarkConfig) -> List[MazeAgent]:
        agents = []
        for i, model_config in enumerate(config.models):
            llm_kwargs = {
                "temperature": model_config.temperature,
                "max_tokens": model_config.max_tokens,
            }

            # Add any extra kwargs from the model config (e.g., reasoning params)
            if hasattr(model_config, '__pydantic_extra__') and model_config.__pydantic_extra__:
                llm_kwargs.update(model_config.__pydantic_extra__)

            agents.append(MazeAgent.create(
                agent_id=f"m{i+1}",
                model=model_config.model,
                name=model_config.name or model_config.model,
                **llm_kwargs
            ))
        return agents

    def select_mazes(self) -> List[MazeRecord]:
        """Mazes this run covers, in difficulty order."""
        if self.test_set is None:
            raise ValueError("Test set not loaded")

        selected: List[MazeRecord] = []
        per_difficulty: Dict[str, int] = {}
        limit = self.config.max_mazes_per_difficulty
        for maze in self.test_set.iter_mazes(self.config.difficulties):
            count = per_difficulty.get(maze.difficulty, 0)
            if limit is not None and count >= limit:
                continue
            per_difficulty[maze.difficulty] = count + 1
            selected.append(maze)
        return selected

    def pending(self) -> List[Tuple[MazeAgent, MazeRecord, int]]:
        """(agent, maze, trial) attempts not yet recorded."""
        done = {e.key for e in self.evaluations}
        work = []
        for maze in self.select_mazes():
            for trial in range(1, self.config.trials + 1):
                for agent in self.agents:
                    if f"{agent.agent_id}|{maze.id}|{trial}" not in done:
                        work.append((agent, maze, trial))
        return work

    def step(self, agent: MazeAgent, maze: MazeRecord, trial: int = 1) -> EvaluationResult:
        """
        Run one model on one maze.

        Prompts the LLM, parses the moves, validates them against the maze
        and classifies the outcome. LLM failures are recorded as api_error.

        Returns:
            EvaluationResult for this attempt
        """
        prompt = build_maze_prompt(maze, self.config.prompt_formats)
        started = datetime.now()
        base = {
            "model": agent.model,
            "agent_id": agent.agent_id,
            "agent_name": agent.name,
            "maze_id": maze.id,
            "difficulty": maze.difficulty,
            "trial": trial,
            "prompt": prompt,
            "prompt_formats": list(self.config.prompt_formats),
            "shortest_path": maze.shortest_path,
            "started_at": started.isoformat(),
        }

        try:
            response = agent.solve(prompt)
        except Exception as e:
            # Handle LLM errors gracefully
            completed = datetime.now()
            result = EvaluationResult(
                **base,
                outcome="api_error",
                error=f"LLM error: {str(e)}",
                completed_at=completed.isoformat(),
                inference_seconds=(completed - started).total_seconds(),
            )
            self.record(result)
            return result

        completed = datetime.now()
        parsed = MazeAgent.parse_response(response.content)

        validation = None
        if response.content.strip() and not parsed.parse_errors:
            validation = validate_maze_solution(maze, parsed.moves)

        outcome = classify_response(
            response.content,
            finish_reason=response.finish_reason,
            has_parse_errors=bool(parsed.parse_errors),
            validation=validation,
        )

        result = EvaluationResult(
            **base,
            outcome=outcome,
            raw_response=response.content,
            reasoning=parsed.reasoning,
            parsed_moves=parsed.moves if not parsed.parse_errors else None,
            parse_errors=parsed.parse_errors,
            validation=validation,
            moves_executed=validation.path_length if validation else None,
            final_position=validation.final_position if validation else None,
            efficiency=validation.efficiency if validation else None,
            finish_reason=response.finish_reason,
            completed_at=completed.isoformat(),
            inference_seconds=(completed - started).total_seconds(),
            prompt_tokens=response.prompt_tokens,
            completion_tokens=response.completion_tokens,
            total_tokens=response.total_tokens,
        )
        self.record(result)
        return result

    def record(self, result: EvaluationResult) -> None:
        """Record an evaluation result."""
        self.evaluations.append(result)

    def discard_outcomes(self, outcomes: Optional[List[str]] = None) -> int:
        """
        Forget evaluations with the given outcomes so the next run retries them.

        Args:
            outcomes: Outcomes to retry (defaults to RETRYABLE_OUTCOMES)

        Returns:
            Number of evaluations discarded
        """
        outcomes = RETRYABLE_OUTCOMES if outcomes is None else outcomes
        kept = [e for e in self.evaluations if e.outcome not in outcomes]
        discarded = len(self.evaluations) - len(kept)
        self.evaluations = kept
        return discarded

    def summarize(self) -> Dict[str, ModelSummary]:
        """
        Aggregate outcomes, success rate and efficiency per model.

        Keyed by agent id, so two entries for the same model (say at
        different temperatures) are scored separately.
        """
        summaries: Dict[str, ModelSummary] = {}
        for agent in self.agents:
            summaries[agent.agent_id] = ModelSummary(agent_id=agent.agent_id, model=agent.model, name=agent.name)

        efficiencies: Dict[str, List[float]] = {}
        for evaluation in self.evaluations:
            summary = summaries.setdefault(
                evaluation.agent_id,
                ModelSummary(agent_id=evaluation.agent_id, model=evaluation.model, name=evaluation.agent_name),
            )
            summary.evaluations += 1
            summary.outcomes[evaluation.outcome] = summary.outcomes.get(evaluation.outcome, 0) + 1
            by_difficulty = summary.by_difficulty.setdefault(evaluation.difficulty, {})
            by_difficulty[evaluation.outcome] = by_difficulty.get(evaluation.outcome, 0) + 1
            if evaluation.total_tokens:
                summary.total_tokens += evaluation.total_tokens
            if evaluation.outcome == "success" and evaluation.efficiency is not None:
                efficiencies.setdefault(evaluation.agent_id, []).append(evaluation.efficiency)

        for agent_id, summary in summaries.items():
            if summary.evaluations:
                summary.success_rate = summary.outcomes.get("success", 0) / summary.evaluations
            values = efficiencies.get(agent_id)
            if values:
                summary.mean_efficiency = sum(values) / len(values)

        return summaries

    def get_result(self) -> BenchmarkResult:
        """
        Get the benchmark result.

        Returns:
            BenchmarkResult containing full run data
        """
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0

        # Calculate total token usage across all evaluations
        total_prompt_tokens = 0
        total_completion_tokens = 0
        total_tokens = 0

        for evaluation in self.evaluations:
            if evaluation.prompt_tokens:
                total_prompt_tokens += evaluation.prompt_tokens
            if evaluation.completion_tokens:
                total_completion_tokens += evaluation.completion_tokens
            if evaluation.total_tokens:
                total_tokens += evaluation.total_tokens

        return BenchmarkResult(
            config=self.config,
            test_set_id=self.test_set.id if self.test_set else "",
            test_set_name=self.test_set.name if self.test_set else "",
            evaluations=self.evaluations,
            summaries=self.summarize(),
            end_reason=self.end_reason,
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
            total_prompt_tokens=total_prompt_tokens,
            total_completion_tokens=total_completion_tokens,
            total_tokens=total_tokens,
        )

    def save_result(self, path: str | Path) -> None:
        """
        Save the benchmark result to a JSON file.

        Args:
            path: Path to save the result file
        """
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(mode="json"), f, indent=2, default=str)

    def run(
        self,
        on_result: Optional[Callable[[EvaluationResult], None]] = None,
        verbose: bool = False,
    ) -> BenchmarkResult:
        """
        Run every pending evaluation.

        Args:
            on_result: Optional callback called after each evaluation
            verbose: If True, print progress to stdout

        Returns:
            BenchmarkResult containing the full run data
        """
        if not self.started_at:
            self.started_at = datetime.now()

        work = self.pending()

        if verbose:
            print(f"Starting benchmark with {len(self.agents)} models")
            print(f"Test set: {self.test_set.name if self.test_set else '?'}")
            print(f"Evaluations to run: {len(work)} ({len(self.evaluations)} already recorded)")
            print("-" * 40)

        for i, (agent, maze, trial) in enumerate(work, start=1):
            if verbose:
                print(
                    f"[{i}/{len(work)}] {agent.name[:30]:<30} {maze.difficulty:<10} "
                    f"{maze.width}x{maze.height} trial {trial} ...",
                    end=" ",
                    flush=True,
                )

            result = self.step(agent, maze, trial)

            if verbose:
                line = result.outcome
                if result.outcome == "success" and result.efficiency is not None:
                    line += f" (efficiency {result.efficiency:.2f})"
                elif result.error:
                    line += f" ({result.error})"
                elif result.validation and result.validation.errors:
                    line += f" ({result.validation.errors[0].message})"
                elif result.parse_errors:
                    line += f" ({result.parse_errors[0].message})"
                print(line)

            if on_result:
                on_result(result)

        self.is_complete = True
        self.end_reason = "All evaluations complete"

        if verbose:
            print("-" * 40)
            print(f"Benchmark complete: {self.end_reason}")
            print("\n=== Model Summaries ===")
            for summary in self.summarize().values():
                efficiency = f"{summary.mean_efficiency:.2f}" if summary.mean_efficiency is not None else "-"
                print(
                    f"{summary.name[:30]:<30} success {summary.success_rate:6.1%}  "
                    f"efficiency {efficiency}  evaluations {summary.evaluations}"
                )

        return self.get_result()
