from __future__ import annotations
import logging
from typing import Optional, Sequence

from .core.app_setup import (
    create_service_container,
    initialize_application,
    parse_command_line_arguments,
)
from .core.operations import run_lookups


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point: parse args, wire services, run lookups."""
    config = parse_command_line_arguments(argv)
    initialize_application(config)
    try:
        container = create_service_container()
    except Exception as e:
        logging.error(f"Error initializing services: {e}")
        return 2
    return run_lookups(config, container)


if __name__ == "__main__":
    raise SystemExit(main())
