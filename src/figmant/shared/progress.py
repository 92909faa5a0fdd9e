"""Rich progress display for the analysis pipeline."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

console = Console()


class PipelineProgress:
    """Tracks pipeline stages (scoring, matching, strategist) with a spinner each."""

    def __init__(self, target: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=target or console,
        )
        self._task_ids: dict[str, int] = {}

    def __enter__(self) -> "PipelineProgress":
        self._progress.__enter__()
        return self

    def __exit__(self, *args: object) -> None:
        self._progress.__exit__(*args)

    def start_stage(self, stage: str) -> None:
        tid = self._progress.add_task(f"[cyan]{stage}[/]", total=None)
        self._task_ids[stage] = tid

    def update_stage(self, stage: str, status: str) -> None:
        if stage in self._task_ids:
            self._progress.update(self._task_ids[stage], description=f"[cyan]{stage}[/]: {status}")

    def finish_stage(self, stage: str, detail: str = "") -> None:
        if stage in self._task_ids:
            suffix = f" ({detail})" if detail else ""
            self._progress.update(
                self._task_ids[stage],
                description=f"[green]✓ {stage}{suffix}[/]",
                completed=True,
            )

    def fail_stage(self, stage: str, error: str) -> None:
        if stage in self._task_ids:
            self._progress.update(
                self._task_ids[stage],
                description=f"[red]✗ {stage}: {error}[/]",
                completed=True,
            )

    def log_event(self, stage: str, message: str, style: str = "dim") -> None:
        """Print a persistent log line above the spinners."""
        self._progress.console.print(f"  [{style}]{stage}:[/] {message}")

    def print_phase(self, label: str) -> None:
        self._progress.console.print(Panel(f"[bold]{label}[/bold]", style="blue"))
