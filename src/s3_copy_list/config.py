# src/s3_copy_list/config.py
"""
Configuration for the s3-copy-list run.

This module captures the copy list and the run flags once, at start-up,
as immutable dataclasses that are passed down to the orchestrator.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from s3_copy_list.exceptions import ConfigError

COPY_LIST_ENV_VAR: str = "S3_COPY_LIST"


def _get_env_var(name: str, default: Optional[str] = None) -> str:
    """
    Retrieves a required environment variable.

    Args:
        name (str): The name of the environment variable.
        default (str, optional): The default value if the variable is not set.

    Returns:
        str: The value of the environment variable.
    """
    value: Optional[str] = os.environ.get(name, default)
    if not value:
        raise ConfigError(f"{name} environment variable is not set")
    return value


@dataclass(frozen=True)
class AppConfig:
    """
    Defines the run's operational parameters.

    Attributes:
        dry_run (bool): Report intended actions without moving any data.
        verbose (bool): Emit timestamped progress lines.
        aws_cli (str): Name or path of the object-store client executable.
    """

    dry_run: bool = False
    verbose: bool = False
    aws_cli: str = "aws"


@dataclass(frozen=True)
class Config:
    """
    Top-level configuration container for a single run.

    Attributes:
        copy_list (str): Comma-separated `source:destination` pairs.
        app (AppConfig): General run settings.
    """

    copy_list: str = field(default_factory=lambda: _get_env_var(COPY_LIST_ENV_VAR))
    app: AppConfig = field(default_factory=AppConfig)

    def __post_init__(self) -> None:
        if not self.copy_list.strip():
            raise ConfigError(f"{COPY_LIST_ENV_VAR} environment variable is not set")
