# src/s3_copy_list/parser.py
"""
Parsing and validation of the copy list.

The copy list is a comma-separated string of `source:destination` pairs.
Because the `s3://` scheme itself contains a colon, the separator between
source and destination is located with a fixed precedence:

1. A pair starting with `s3://` splits at the first colon after the scheme.
2. Otherwise a pair containing `:s3://` splits right before that marker.
3. Otherwise the pair splits at its last colon, so local paths may carry
   colons of their own before the final separator.

Existing configuration strings depend on this exact order.
"""

import logging
import os
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Pattern, Tuple

from s3_copy_list.exceptions import InvalidEndpointError, MalformedPairError

logger: logging.Logger = logging.getLogger(__name__)

S3_SCHEME: str = "s3://"
_REMOTE_MARKER: str = ":" + S3_SCHEME
_DESTINATION_FORMAT: Pattern[str] = re.compile(r"^(s3://|/|\./|[a-zA-Z])")


def is_remote(path: str) -> bool:
    """Returns True if the path is an object-store URL."""
    return path.startswith(S3_SCHEME)


class TaskOutcome(Enum):
    """Enumeration for the final state of a copy task."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED_MALFORMED = "skipped-malformed"
    SIMULATED = "simulated"


@dataclass
class CopyTask:
    """
    One requested transfer, created per non-empty copy-list segment.

    Attributes:
        raw_pair (str): The trimmed segment text.
        source (str): The parsed source, empty if the pair is malformed.
        destination (str): The parsed destination, empty if the pair is malformed.
        outcome (TaskOutcome, optional): Set once the task is resolved.
        error (str, optional): Parse diagnostic for a malformed pair.
    """

    raw_pair: str
    source: str = ""
    destination: str = ""
    outcome: Optional[TaskOutcome] = None
    error: Optional[str] = None

    @property
    def source_is_remote(self) -> bool:
        return is_remote(self.source)

    @property
    def destination_is_remote(self) -> bool:
        return is_remote(self.destination)

    def resolve(self, outcome: TaskOutcome) -> None:
        """
        Records the task outcome.

        Args:
            outcome (TaskOutcome): The final state of the task.
        """
        if self.outcome is not None:
            raise ValueError(
                f"Outcome for '{self.raw_pair}' already set to {self.outcome.value}"
            )
        self.outcome = outcome


def split_pair(pair: str) -> Tuple[str, str]:
    """
    Splits a single pair into its trimmed source and destination.

    Args:
        pair (str): A trimmed, non-empty copy-list segment.

    Returns:
        Tuple[str, str]: The source and destination.

    Raises:
        MalformedPairError: If no separator is found or either half is empty.
    """
    if ":" not in pair:
        raise MalformedPairError(
            f"No colon separator found in pair '{pair}'. "
            "Expected format: 'source:destination'"
        )

    if is_remote(pair):
        remainder: str = pair[len(S3_SCHEME) :]
        if ":" not in remainder:
            raise MalformedPairError(f"Could not find destination in pair '{pair}'")
        bucket_and_key, _, destination = remainder.partition(":")
        source: str = S3_SCHEME + bucket_and_key
    elif _REMOTE_MARKER in pair:
        source, _, remote_rest = pair.rpartition(_REMOTE_MARKER)
        destination = S3_SCHEME + remote_rest
    else:
        source, _, destination = pair.rpartition(":")

    source, destination = source.strip(), destination.strip()
    if not source or not destination:
        raise MalformedPairError(
            f"Could not parse pair '{pair}'. Expected format: 'source:destination'"
        )
    return source, destination


def parse_copy_list(copy_list: str) -> List[CopyTask]:
    """
    Splits a copy list into ordered copy tasks.

    Empty segments (consecutive, leading or trailing commas) are dropped and
    produce no task. Malformed segments still produce a task, already
    resolved as `SKIPPED_MALFORMED` with its diagnostic in `error`.

    Args:
        copy_list (str): The raw comma-separated configuration value.

    Returns:
        List[CopyTask]: One task per non-empty segment, in configuration order.
    """
    tasks: List[CopyTask] = []
    for segment in copy_list.split(","):
        pair: str = segment.strip()
        if not pair:
            logger.info("Skipping empty pair")
            continue

        task: CopyTask = CopyTask(raw_pair=pair)
        try:
            task.source, task.destination = split_pair(pair)
        except MalformedPairError as e:
            task.error = str(e)
            task.resolve(TaskOutcome.SKIPPED_MALFORMED)
        tasks.append(task)
    return tasks


def validate_task(task: CopyTask) -> None:
    """
    Applies the best-effort endpoint checks to a parsed task.

    A local source is accepted if it exists or if its parent directory does;
    a deeper, not-yet-existing path is rejected. Remote sources are never
    checked before the transfer is attempted. The destination check only
    weeds out obviously broken strings.

    Args:
        task (CopyTask): A task with both source and destination parsed.

    Raises:
        InvalidEndpointError: If the source or destination fails its check.
    """
    source: str = task.source
    if not task.source_is_remote:
        parent: str = os.path.dirname(source.rstrip("/")) or "."
        if not os.path.exists(source) and not os.path.isdir(parent):
            raise InvalidEndpointError(
                f"Source '{source}' does not exist and is not a valid S3 URL, "
                "skipping..."
            )

    if not _DESTINATION_FORMAT.match(task.destination):
        raise InvalidEndpointError(
            f"Destination '{task.destination}' does not appear to be a valid "
            "path format, skipping..."
        )
