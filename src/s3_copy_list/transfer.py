# src/s3_copy_list/transfer.py
"""
Transfer primitives used by the dispatcher.

Remote transfers are delegated to a pre-authenticated object-store client
behind the `TransferClient` protocol; the default implementation shells out
to the AWS CLI. Purely local copies are handled in-process by `LocalCopier`.
Both report a numeric exit status, zero meaning success.
"""

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol

from s3_copy_list.exceptions import ToolUnavailableError

logger: logging.Logger = logging.getLogger(__name__)


class TransferClient(Protocol):
    """The two object-store operations the dispatcher relies on."""

    def copy_object(self, source: str, destination: str, dry_run: bool = False) -> int:
        ...

    def sync_tree(self, source: str, destination: str, dry_run: bool = False) -> int:
        ...


class AwsCliClient:
    """
    A `TransferClient` backed by `aws s3 cp` and `aws s3 sync`.

    Credentials, profile and endpoint are resolved by the CLI itself from the
    process environment.
    """

    def __init__(self, executable: str) -> None:
        """
        Args:
            executable (str): Path to the `aws` executable.
        """
        self._executable: str = executable

    @classmethod
    def locate(cls, name: str = "aws") -> "AwsCliClient":
        """
        Builds a client for the named executable found on PATH.

        Args:
            name (str): Executable name or path.

        Returns:
            AwsCliClient: A client bound to the resolved executable.

        Raises:
            ToolUnavailableError: If the executable cannot be found.
        """
        executable: Optional[str] = shutil.which(name)
        if executable is None:
            raise ToolUnavailableError(
                f"AWS CLI ('{name}') is not installed or not in PATH"
            )
        logger.debug(f"Using AWS CLI at '{executable}'")
        return cls(executable)

    def copy_object(self, source: str, destination: str, dry_run: bool = False) -> int:
        return self._run("cp", source, destination, dry_run)

    def sync_tree(self, source: str, destination: str, dry_run: bool = False) -> int:
        return self._run("sync", source, destination, dry_run)

    def build_command(
        self, subcommand: str, source: str, destination: str, dry_run: bool
    ) -> List[str]:
        """
        Builds the argument vector for one `aws s3` invocation.

        Args:
            subcommand (str): Either "cp" or "sync".
            source (str): Transfer source.
            destination (str): Transfer destination.
            dry_run (bool): Append the CLI's simulate modifier.

        Returns:
            List[str]: The command to execute.
        """
        cmd: List[str] = [self._executable, "s3", subcommand, source, destination]
        if dry_run:
            cmd.append("--dryrun")
        return cmd

    def _run(self, subcommand: str, source: str, destination: str, dry_run: bool) -> int:
        cmd: List[str] = self.build_command(subcommand, source, destination, dry_run)
        # Commands are always shown under dry-run
        logger.log(
            logging.INFO if dry_run else logging.DEBUG,
            f"Executing: {shlex.join(cmd)}",
        )
        try:
            completed: subprocess.CompletedProcess = subprocess.run(cmd, check=False)
        except OSError as e:
            logger.error(f"Could not execute '{self._executable}': {e}")
            return 127
        return completed.returncode


class LocalCopier:
    """Copies files and directory trees between two local paths."""

    def copy_tree(self, source: str, destination: str) -> int:
        """
        Recursively copies a directory, following rsync's trailing-slash rule.

        A source ending in `/` has its contents copied into `destination`;
        otherwise the directory itself is copied under `destination`.

        Args:
            source (str): An existing local directory.
            destination (str): The target directory, created as needed.

        Returns:
            int: 0 on success, 1 on failure.
        """
        target: Path = Path(destination)
        if not source.endswith("/"):
            target = target / Path(source).name
        try:
            shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
        except OSError as e:
            logger.error(f"Local tree copy '{source}' -> '{target}' failed: {e}")
            return 1
        return 0

    def copy_file(self, source: str, destination: str) -> int:
        """
        Copies a single file, into `destination` if it is a directory.

        Returns:
            int: 0 on success, 1 on failure.
        """
        try:
            shutil.copy2(source, destination)
        except OSError as e:
            logger.error(f"Local copy '{source}' -> '{destination}' failed: {e}")
            return 1
        return 0
