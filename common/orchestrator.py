# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Centralized orchestrator for running an ordered startup sequence of tasks.
"""

import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from config.config_models import SYMBOLS_DEFAULT


class Orchestrator:
    """Runs a series of named tasks strictly in the order they were added."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        """
        Initializes the Orchestrator.

        Args:
            app_settings: The application settings object.
            orchestrator_logger: An optional logger instance.
        """
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Dict[str, Any]] = []
        # Shared context for tasks to pass state between each other
        self.context: Dict[str, Any] = {}
        self.completed_tasks: List[str] = []

    @property
    def symbols(self) -> Dict[str, str]:
        symbols = getattr(self.app_settings, "symbols", None)
        return symbols if isinstance(symbols, dict) else SYMBOLS_DEFAULT

    def add_task(
        self,
        name: str,
        func: Callable,
        args: Optional[List[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
        fatal: bool = True,
    ) -> None:
        """
        Adds a task to the execution list.

        Args:
            name: A human-readable name for the task.
            func: The function to execute for this task. It is called with
                ``context`` and ``app_settings`` keyword arguments.
            args: Positional arguments to pass to the function.
            kwargs: Keyword arguments to pass to the function.
            fatal: If True, a failure in this task ends the process.
        """
        self.tasks.append({
            "name": name,
            "func": func,
            "args": args or [],
            "kwargs": kwargs or {},
            "fatal": fatal,
        })
        self.logger.debug(f"Task '{name}' added to the queue.")

    def run(self) -> bool:
        """
        Executes all added tasks in sequence.

        A ``SystemExit`` raised by a task is not intercepted.

        Returns:
            True if every task succeeded, False if a non-fatal task failed.
        """
        self.logger.info("Orchestration started.")
        all_succeeded = True
        for i, task in enumerate(self.tasks):
            task_name = task["name"]
            self.logger.info(
                f"--- Stage {i + 1}: Running task '{task_name}' ---"
            )

            try:
                call_kwargs = dict(task["kwargs"])
                call_kwargs["context"] = self.context
                call_kwargs["app_settings"] = self.app_settings

                result = task["func"](*task["args"], **call_kwargs)

                self.context[f"{task_name}_result"] = result
                self.completed_tasks.append(task_name)
                self.logger.info(
                    f"{self.symbols.get('success', '')} Task '{task_name}' completed successfully."
                )

            except Exception as e:
                self.logger.critical(
                    f"{self.symbols.get('critical', '')} Task '{task_name}' failed: {e}",
                    exc_info=True,
                )
                if task["fatal"]:
                    self.logger.error(
                        "A fatal error occurred. Halting orchestration and exiting application."
                    )
                    sys.exit(1)
                all_succeeded = False
                self.logger.warning(
                    f"Task '{task_name}' was non-fatal. Continuing orchestration."
                )

        if all_succeeded:
            self.logger.info(
                f"{self.symbols.get('sparkles', '')} Orchestration finished successfully."
            )
        else:
            self.logger.warning("Orchestration finished with non-fatal failures.")
        return all_succeeded
