# tests/unit/test_orchestrator.py
"""
Unit tests for the `CopyOrchestrator` run loop.

These tests drive complete runs against a recording fake client and verify
the counters, the ordering of transfers and the per-pair error handling.
"""

from pathlib import Path
from typing import Callable, List

import pytest
from conftest import FakeTransferClient

from s3_copy_list.config import Config
from s3_copy_list.orchestrator import CopyOrchestrator, RunSummary
from s3_copy_list.parser import TaskOutcome


def test_run_counts_every_non_empty_pair(
    tmp_path: Path,
    fake_client: FakeTransferClient,
    make_config: Callable[..., Config],
) -> None:
    """
    Tests that all valid pairs succeed and are transferred in order.

    Arrange:
        - Three valid pairs plus empty segments.
    Act:
        - Run the orchestrator.
    Assert:
        - `total_pairs == succeeded == 3` and nothing failed.
        - The client saw the transfers in configuration order.

    Args:
        tmp_path (Path): The temporary Path to use.
        fake_client (FakeTransferClient): The recording client.
        make_config (Callable): Factory for run configurations.
    """
    copy_list: str = (
        f"s3://b/one:{tmp_path}/one, ,"
        f"s3://b/dir/:{tmp_path}/dir/,,"
        "s3://b/three:s3://c/three,"
    )

    summary: RunSummary = CopyOrchestrator(make_config(copy_list), fake_client).run()

    assert summary == RunSummary(total_pairs=3, succeeded=3, failed=0, simulated=0)
    assert summary.ok
    assert [call[1] for call in fake_client.calls] == [
        "s3://b/one",
        "s3://b/dir/",
        "s3://b/three",
    ]


def test_run_continues_after_failures(
    tmp_path: Path,
    fake_client: FakeTransferClient,
    make_config: Callable[..., Config],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """
    Tests that malformed, invalid and failed pairs are counted but never abort.

    Arrange:
        - One colon-less pair, one pair with a missing local source, one
          pair whose transfer fails and one pair that succeeds.
    Act:
        - Run the orchestrator.
    Assert:
        - Three failures and one success; the malformed and invalid pairs
          never reached the client.
        - The transfer failure is logged with its exit status.

    Args:
        tmp_path (Path): The temporary Path to use.
        fake_client (FakeTransferClient): The recording client.
        make_config (Callable): Factory for run configurations.
        caplog (pytest.LogCaptureFixture): Pytest fixture to capture log output.
    """
    caplog.set_level("INFO")
    fake_client.statuses["s3://b/broken"] = 1
    copy_list: str = (
        "nocolon,"
        f"{tmp_path}/missing/src:/tmp/dst,"
        "s3://b/broken:s3://c/broken,"
        "s3://b/fine:s3://c/fine"
    )

    summary: RunSummary = CopyOrchestrator(make_config(copy_list), fake_client).run()

    assert summary == RunSummary(total_pairs=4, succeeded=1, failed=3, simulated=0)
    assert not summary.ok
    assert [call[1] for call in fake_client.calls] == ["s3://b/broken", "s3://b/fine"]
    assert "No colon separator found in pair 'nocolon'" in caplog.text
    assert "does not exist and is not a valid S3 URL" in caplog.text
    assert (
        "Failed to copy s3://b/broken to s3://c/broken (exit code: 1)" in caplog.text
    )
    assert "✓ Successfully copied: s3://b/fine -> s3://c/fine" in caplog.text


def test_run_remote_to_local_directory_end_to_end(
    tmp_path: Path,
    fake_client: FakeTransferClient,
    make_config: Callable[..., Config],
) -> None:
    """
    Tests a single-object download into a directory that does not exist yet.

    Args:
        tmp_path (Path): The temporary Path to use.
        fake_client (FakeTransferClient): The recording client.
        make_config (Callable): Factory for run configurations.
    """
    destination: str = f"{tmp_path}/app/data/"

    summary: RunSummary = CopyOrchestrator(
        make_config(f"s3://b/f.zip:{destination}"), fake_client
    ).run()

    assert Path(destination).is_dir()
    assert fake_client.calls == [("copy_object", "s3://b/f.zip", destination, False)]
    assert summary.succeeded == 1
    assert summary.ok


def test_run_rejects_missing_local_source(
    tmp_path: Path,
    fake_client: FakeTransferClient,
    make_config: Callable[..., Config],
) -> None:
    """
    Tests that a source below a missing directory is rejected before transfer.

    Args:
        tmp_path (Path): The temporary Path to use.
        fake_client (FakeTransferClient): The recording client.
        make_config (Callable): Factory for run configurations.
    """
    summary: RunSummary = CopyOrchestrator(
        make_config(f"{tmp_path}/missing/src:/tmp/dst"), fake_client
    ).run()

    assert summary == RunSummary(total_pairs=1, succeeded=0, failed=1, simulated=0)
    assert fake_client.calls == []


def test_run_dry_run_never_counts_success(
    tmp_path: Path,
    fake_client: FakeTransferClient,
    make_config: Callable[..., Config],
    local_tree: Callable[[Path, List[str]], Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """
    Tests that dry-run simulates every pair without moving data.

    Arrange:
        - A remote download, a local file copy and a malformed pair.
    Act:
        - Run the orchestrator with `dry_run=True`.
    Assert:
        - Nothing counts as succeeded; valid pairs are simulated.
        - No directory or file was created.
        - No success line was logged.

    Args:
        tmp_path (Path): The temporary Path to use.
        fake_client (FakeTransferClient): The recording client.
        make_config (Callable): Factory for run configurations.
        local_tree (Callable): Factory for local source files.
        caplog (pytest.LogCaptureFixture): Pytest fixture to capture log output.
    """
    caplog.set_level("INFO")
    src: Path = local_tree(tmp_path / "src", ["a.txt"])
    copy_list: str = (
        f"s3://b/f.zip:{tmp_path}/remote/,{src}/a.txt:{tmp_path}/local/a.txt,oops"
    )

    summary: RunSummary = CopyOrchestrator(
        make_config(copy_list, dry_run=True), fake_client
    ).run()

    assert summary == RunSummary(total_pairs=3, succeeded=0, failed=1, simulated=2)
    assert fake_client.calls == [
        ("copy_object", "s3://b/f.zip", f"{tmp_path}/remote/", True)
    ]
    assert not (tmp_path / "remote").exists()
    assert not (tmp_path / "local").exists()
    assert "DRY RUN MODE" in caplog.text
    assert "Successfully copied" not in caplog.text
    assert "Simulated copies: 2" in caplog.text


def test_summary_records_each_outcome_once() -> None:
    """
    Tests that every outcome folds into exactly one counter.
    """
    summary: RunSummary = RunSummary(total_pairs=4)
    for outcome in TaskOutcome:
        summary.record(outcome)

    assert summary.succeeded == 1
    assert summary.simulated == 1
    assert summary.failed == 2
    assert summary.succeeded + summary.failed + summary.simulated == 4
