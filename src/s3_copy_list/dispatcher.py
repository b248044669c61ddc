# src/s3_copy_list/dispatcher.py
"""
Selects and executes the transfer operation for one copy task.

The operation depends on whether each endpoint is remote or local, on a
trailing `/` for remote sources, and on whether a local source is a
directory. Directory creation happens before the transfer and is skipped
entirely under dry-run.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from s3_copy_list.exceptions import TransferError
from s3_copy_list.parser import CopyTask
from s3_copy_list.transfer import LocalCopier, TransferClient

logger: logging.Logger = logging.getLogger(__name__)


class Operation(Enum):
    """Enumeration of the available transfer primitives."""

    COPY_OBJECT = "copy-object"
    SYNC_TREE = "sync-tree"
    LOCAL_COPY_TREE = "local-copy-tree"
    LOCAL_COPY_FILE = "local-copy-file"

    @property
    def is_remote(self) -> bool:
        return self in (Operation.COPY_OBJECT, Operation.SYNC_TREE)


@dataclass(frozen=True)
class TransferPlan:
    """
    The operation chosen for a task.

    Attributes:
        operation (Operation): The primitive to invoke.
        source (str): Transfer source.
        destination (str): Transfer destination.
        make_dir (str, optional): Directory to create before the transfer.
    """

    operation: Operation
    source: str
    destination: str
    make_dir: Optional[str] = None

    def describe(self) -> str:
        """Returns a shell-like rendering of the planned operation."""
        if self.operation is Operation.LOCAL_COPY_TREE:
            return f'rsync -av "{self.source}" "{self.destination}"'
        if self.operation is Operation.LOCAL_COPY_FILE:
            return f'cp "{self.source}" "{self.destination}"'
        verb: str = "cp" if self.operation is Operation.COPY_OBJECT else "sync"
        return f'aws s3 {verb} "{self.source}" "{self.destination}"'


def _target_dir(destination: str) -> str:
    """Directory that must exist for a single-file copy to `destination`."""
    if destination.endswith("/"):
        return destination
    return os.path.dirname(destination) or "."


def plan_transfer(task: CopyTask) -> TransferPlan:
    """
    Chooses the transfer operation for a validated task.

    Args:
        task (CopyTask): A task whose source and destination passed validation.

    Returns:
        TransferPlan: The operation and any directory to create first.
    """
    source: str = task.source
    destination: str = task.destination

    if task.source_is_remote:
        trailing_slash: bool = source.endswith("/")
        if task.destination_is_remote:
            operation: Operation = (
                Operation.SYNC_TREE if trailing_slash else Operation.COPY_OBJECT
            )
            return TransferPlan(operation, source, destination)
        if trailing_slash:
            return TransferPlan(
                Operation.SYNC_TREE, source, destination, make_dir=destination
            )
        return TransferPlan(
            Operation.COPY_OBJECT,
            source,
            destination,
            make_dir=_target_dir(destination),
        )

    source_is_dir: bool = os.path.isdir(source)
    if task.destination_is_remote:
        operation = Operation.SYNC_TREE if source_is_dir else Operation.COPY_OBJECT
        return TransferPlan(operation, source, destination)
    if source_is_dir:
        return TransferPlan(
            Operation.LOCAL_COPY_TREE, source, destination, make_dir=destination
        )
    return TransferPlan(
        Operation.LOCAL_COPY_FILE,
        source,
        destination,
        make_dir=_target_dir(destination),
    )


class TransferDispatcher:
    """Runs, or simulates, exactly one transfer per task."""

    def __init__(
        self,
        client: TransferClient,
        copier: Optional[LocalCopier] = None,
        dry_run: bool = False,
    ) -> None:
        """
        Args:
            client (TransferClient): The object-store client for remote operations.
            copier (LocalCopier, optional): Handler for local-to-local copies.
            dry_run (bool): Simulate instead of transferring.
        """
        self._client: TransferClient = client
        self._copier: LocalCopier = copier or LocalCopier()
        self._dry_run: bool = dry_run

    def execute(self, task: CopyTask) -> TransferPlan:
        """
        Performs the planned operation for a task.

        Args:
            task (CopyTask): A validated task.

        Returns:
            TransferPlan: The plan that was executed.

        Raises:
            TransferError: If directory creation fails or the operation
                returns a non-zero status.
        """
        plan: TransferPlan = plan_transfer(task)
        logger.debug(f"Processing: {plan.source} -> {plan.destination}")
        logger.debug(f"Selected {plan.operation.value}: {plan.describe()}")

        if plan.make_dir and not self._dry_run:
            try:
                os.makedirs(plan.make_dir, exist_ok=True)
            except OSError as e:
                logger.error(f"Could not create directory '{plan.make_dir}': {e}")
                raise TransferError(plan.source, plan.destination, 1) from e

        exit_code: int = self._run(plan)
        if exit_code != 0:
            raise TransferError(plan.source, plan.destination, exit_code)
        return plan

    def _run(self, plan: TransferPlan) -> int:
        if plan.operation.is_remote:
            if plan.operation is Operation.SYNC_TREE:
                return self._client.sync_tree(
                    plan.source, plan.destination, dry_run=self._dry_run
                )
            return self._client.copy_object(
                plan.source, plan.destination, dry_run=self._dry_run
            )

        logger.debug("Local to local copy detected")
        if self._dry_run:
            logger.info(f"[DRY-RUN] Would execute: {plan.describe()}")
            return 0
        logger.debug(f"Executing: {plan.describe()}")
        if plan.operation is Operation.LOCAL_COPY_TREE:
            return self._copier.copy_tree(plan.source, plan.destination)
        return self._copier.copy_file(plan.source, plan.destination)
