"""
Lookup operations for the command line front end.

Runs one lookup per tracking number, one at a time, and renders each outcome
either as a text card with a progress bar or as a JSON line.
"""

from __future__ import annotations
import asyncio
import json
import logging
import sys
from typing import List, TextIO

from .app_setup import AppConfig, ServiceContainer
from ..services.status_normalizer import StatusNormalizer
from ..services.tracking_resolver import OutcomeKind, TrackingOutcome, outcome_to_dict
from ..utils.constants import Messages

BAR_WIDTH = 20
_PLACEHOLDER = "—"


def render_progress_bar(percent: float, width: int = BAR_WIDTH) -> str:
    filled = int(round(width * max(0.0, min(percent, 100.0)) / 100))
    return f"[{'#' * filled}{'-' * (width - filled)}] {percent:.0f}%"


def render_outcome(outcome: TrackingOutcome, normalizer: StatusNormalizer) -> str:
    """
    Format an outcome as a text card.

    Args:
        outcome (TrackingOutcome): Lookup outcome
        normalizer (StatusNormalizer): Provides the scale for progress steps

    Returns:
        str: Multi-line card
    """
    if outcome.result is None:
        return outcome.message

    result = outcome.result
    progress = normalizer.progress(result.status)
    lines = [
        outcome.message,
        f"  Трек-номер: {result.tracking_number}",
        f"  Статус:     {result.status or Messages.STATUS_UNAVAILABLE}",
        f"  Дата:       {result.date or _PLACEHOLDER}",
        f"  Партия:     {result.batch_id or _PLACEHOLDER}",
        f"  {render_progress_bar(progress.percent)}",
    ]
    for step, active in zip(normalizer.scale, progress.steps):
        lines.append(f"  [{'x' if active else ' '}] {step}")
    return "\n".join(lines)


def exit_code_for(outcomes: List[TrackingOutcome]) -> int:
    """0 when every lookup found a parcel, 2 on any error, 1 otherwise."""
    if any(o.kind is OutcomeKind.ERROR for o in outcomes):
        return 2
    if all(o.kind is OutcomeKind.FOUND for o in outcomes):
        return 0
    return 1


async def _run(config: AppConfig, container: ServiceContainer, out: TextIO) -> List[TrackingOutcome]:
    outcomes: List[TrackingOutcome] = []
    for tracking_number in config.tracking_numbers:
        outcome = await container.resolver.track(tracking_number)
        outcomes.append(outcome)
        if config.as_json:
            out.write(json.dumps(outcome_to_dict(outcome, container.normalizer), ensure_ascii=False) + "\n")
        else:
            out.write(render_outcome(outcome, container.normalizer) + "\n\n")
    return outcomes


def run_lookups(config: AppConfig, container: ServiceContainer, out: TextIO = sys.stdout) -> int:
    """
    Track every configured number and print the results.

    Args:
        config (AppConfig): Parsed CLI configuration
        container (ServiceContainer): Initialized services
        out (TextIO): Destination for rendered results

    Returns:
        int: Process exit code
    """
    try:
        outcomes = asyncio.run(_run(config, container, out))
    finally:
        container.fetcher.close()
    found = sum(1 for o in outcomes if o.ok)
    logging.info("Lookups finished: %d/%d found", found, len(outcomes))
    return exit_code_for(outcomes)
