"""
Command line wiring for the parcel tracker.

Modules:
    - app_setup: argument parsing, logging setup and service container
    - operations: lookup execution and result rendering
"""

from .app_setup import (
    AppConfig,
    ServiceContainer,
    parse_command_line_arguments,
    initialize_application,
    create_service_container,
)
from .operations import run_lookups, render_outcome, exit_code_for

__all__ = [
    "AppConfig",
    "ServiceContainer",
    "parse_command_line_arguments",
    "initialize_application",
    "create_service_container",
    "run_lookups",
    "render_outcome",
    "exit_code_for",
]
