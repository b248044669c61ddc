# src/s3_copy_list/orchestrator.py
"""Core orchestration logic for a copy-list run."""

import logging
from dataclasses import dataclass
from typing import List, Optional

from s3_copy_list.config import COPY_LIST_ENV_VAR, Config
from s3_copy_list.dispatcher import TransferDispatcher
from s3_copy_list.exceptions import InvalidEndpointError, TransferError
from s3_copy_list.parser import CopyTask, TaskOutcome, parse_copy_list, validate_task
from s3_copy_list.transfer import LocalCopier, TransferClient

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """
    Run-level counters, updated once per task.

    Attributes:
        total_pairs (int): Number of non-empty pairs in the copy list.
        succeeded (int): Pairs whose transfer completed.
        failed (int): Pairs that were malformed, invalid or failed to transfer.
        simulated (int): Pairs processed without error under dry-run.
    """

    total_pairs: int = 0
    succeeded: int = 0
    failed: int = 0
    simulated: int = 0

    @property
    def ok(self) -> bool:
        return self.failed == 0

    def record(self, outcome: TaskOutcome) -> None:
        """
        Folds a task outcome into the counters.

        Args:
            outcome (TaskOutcome): The resolved outcome of a task.
        """
        if outcome is TaskOutcome.SUCCEEDED:
            self.succeeded += 1
        elif outcome is TaskOutcome.SIMULATED:
            self.simulated += 1
        else:
            self.failed += 1


class CopyOrchestrator:
    """Processes every pair of the copy list, one after the other."""

    def __init__(
        self,
        config: Config,
        client: TransferClient,
        copier: Optional[LocalCopier] = None,
    ) -> None:
        """
        Initializes the orchestrator with the given configuration.

        Args:
            config (Config): The run configuration.
            client (TransferClient): The object-store client for remote operations.
            copier (LocalCopier, optional): Handler for local-to-local copies.
        """
        self._config: Config = config
        self._dispatcher: TransferDispatcher = TransferDispatcher(
            client, copier, dry_run=config.app.dry_run
        )

    def run(self) -> RunSummary:
        """
        Executes every copy task in configuration order.

        Per-pair problems are logged and counted; they never stop the run.

        Returns:
            RunSummary: The final counters.
        """
        logger.debug("Starting S3 copy operations")
        logger.debug(f"{COPY_LIST_ENV_VAR}: {self._config.copy_list}")
        if self._config.app.dry_run:
            logger.info("DRY RUN MODE - No actual copying will be performed")

        tasks: List[CopyTask] = parse_copy_list(self._config.copy_list)
        summary: RunSummary = RunSummary(total_pairs=len(tasks))
        logger.info(f"Found {summary.total_pairs} copy operations to perform")
        logger.debug(f"Parsed pairs: {' '.join(t.raw_pair for t in tasks)}")

        for task in tasks:
            self._process(task)
            summary.record(task.outcome)

        self._log_summary(summary)
        return summary

    def _process(self, task: CopyTask) -> None:
        """
        Validates and transfers a single task, resolving its outcome.

        Args:
            task (CopyTask): The task to process.
        """
        if task.outcome is TaskOutcome.SKIPPED_MALFORMED:
            logger.warning(task.error)
            return

        try:
            validate_task(task)
        except InvalidEndpointError as e:
            logger.warning(str(e))
            task.resolve(TaskOutcome.SKIPPED_MALFORMED)
            return

        try:
            self._dispatcher.execute(task)
        except TransferError as e:
            logger.error(str(e))
            task.resolve(TaskOutcome.FAILED)
            return

        if self._config.app.dry_run:
            task.resolve(TaskOutcome.SIMULATED)
        else:
            logger.info(f"✓ Successfully copied: {task.source} -> {task.destination}")
            task.resolve(TaskOutcome.SUCCEEDED)

    def _log_summary(self, summary: RunSummary) -> None:
        logger.info("====================")
        logger.info("Copy Operations Summary:")
        logger.info(f"Total pairs processed: {summary.total_pairs}")
        logger.info(f"Successful copies: {summary.succeeded}")
        logger.info(f"Failed copies: {summary.failed}")
        if self._config.app.dry_run:
            logger.info(f"Simulated copies: {summary.simulated}")
        if summary.ok:
            logger.debug("All copy operations completed successfully")
