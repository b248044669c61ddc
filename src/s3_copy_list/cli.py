# src/s3_copy_list/cli.py
"""Command-line interface for the s3-copy-list tool."""

import logging
import sys
from typing import Any, Dict

import click
from dotenv import load_dotenv
from rich.logging import RichHandler

from s3_copy_list.config import AppConfig, Config
from s3_copy_list.exceptions import S3CopyListError
from s3_copy_list.orchestrator import CopyOrchestrator, RunSummary
from s3_copy_list.transfer import AwsCliClient

logger: logging.Logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure rich-based logging for the application."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%Y-%m-%d %H:%M:%S]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.option(
    "-n",
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be copied without actually copying.",
)
@click.option(
    "--copy-list",
    type=str,
    default=None,
    help="Comma-separated source:destination pairs. Overrides S3_COPY_LIST.",
)
@click.option(
    "--aws-cli",
    type=str,
    default="aws",
    help="Name or path of the AWS CLI executable.",
    show_default=True,
)
def cli(**kwargs: Any) -> None:
    """
    Copy a list of objects between S3 and the local filesystem.

    Source and destination pairs are read from the S3_COPY_LIST environment
    variable. Sources and destinations can be S3 URLs or local file paths;
    a source ending in '/' is synchronized recursively.

    \b
    Example:
      S3_COPY_LIST="s3://bucket1/path1:/local/path,/local/file:s3://bucket2/file"

    \b
    Environment Variables:
      S3_COPY_LIST   Comma-separated list of source:destination pairs
      AWS_PROFILE    (Optional) AWS profile to use
    """
    load_dotenv()
    app_config: AppConfig = AppConfig(
        dry_run=kwargs["dry_run"],
        verbose=kwargs["verbose"],
        aws_cli=kwargs["aws_cli"],
    )
    setup_logging("DEBUG" if app_config.verbose else "INFO")

    try:
        config_kwargs: Dict[str, Any] = {"app": app_config}
        if kwargs["copy_list"] is not None:
            config_kwargs["copy_list"] = kwargs["copy_list"]
        config: Config = Config(**config_kwargs)

        client: AwsCliClient = AwsCliClient.locate(app_config.aws_cli)
        summary: RunSummary = CopyOrchestrator(config, client).run()
    except S3CopyListError as e:
        logger.critical(f"Error: {e}")
        sys.exit(1)
    except Exception:
        logger.critical(
            "An unexpected error caused the application to fail:", exc_info=True
        )
        sys.exit(1)

    if not summary.ok:
        sys.exit(1)
    logger.info("✅ Run completed successfully.")


if __name__ == "__main__":
    cli()
