"""Progress tracking utilities for CLI."""

from typing import List

import click

from timesheet_extractor.cli.utils.formatters import format_info


class ProgressTracker:
    """Track progress through the stages of a command.

    Example:
        >>> tracker = ProgressTracker(["Loading images", "Extracting"])
        >>> tracker.start_next()  # prints "ℹ [1/2] Loading images..."
    """

    def __init__(self, stages: List[str], quiet: bool = False):
        self.stages = stages
        self.total_stages = len(stages)
        self.current_stage = 0
        self.quiet = quiet

    def start_next(self) -> None:
        """Announce the next stage and advance."""
        if self.current_stage >= self.total_stages:
            return
        if not self.quiet:
            click.echo(format_info(f"{self.get_current_message()}..."))
        self.current_stage += 1

    def get_current_message(self) -> str:
        """Current stage name with a [n/total] indicator."""
        if self.current_stage < self.total_stages:
            stage_name = self.stages[self.current_stage]
            return f"[{self.current_stage + 1}/{self.total_stages}] {stage_name}"
        return f"[{self.total_stages}/{self.total_stages}] Complete"

    def is_complete(self) -> bool:
        return self.current_stage >= self.total_stages
