# src/todo_planner/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then serves the HTTP API with uvicorn
until interrupted.
"""

from __future__ import annotations

import logging

import uvicorn

from ..cli.bootstrap import build_app, create_initial_state
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s on %s:%s...", settings.app_name, settings.host, settings.port)

    state = create_initial_state(settings=settings)
    app = build_app(state)

    try:
        # log_config=None keeps the handlers installed by setup_logging.
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        state.task_store.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
