# tests/conftest.py
"""
Pytest configuration and fixtures for the s3-copy-list tests.

This module provides:
- A recording fake of the object-store client, so no AWS CLI is needed.
- A factory for run configurations with an explicit copy list.
- A helper for laying out local source trees in a temporary directory.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Generator, List, Tuple

import pytest

from s3_copy_list.config import AppConfig, Config


@dataclass
class FakeTransferClient:
    """
    Records every transfer request and returns a configurable status.

    Attributes:
        calls (List[Tuple[str, str, str, bool]]): (operation, source,
            destination, dry_run) for each call, in order.
        statuses (Dict[str, int]): Exit status per source; 0 if absent.
    """

    calls: List[Tuple[str, str, str, bool]] = field(default_factory=list)
    statuses: Dict[str, int] = field(default_factory=dict)

    def copy_object(self, source: str, destination: str, dry_run: bool = False) -> int:
        self.calls.append(("copy_object", source, destination, dry_run))
        return self.statuses.get(source, 0)

    def sync_tree(self, source: str, destination: str, dry_run: bool = False) -> int:
        self.calls.append(("sync_tree", source, destination, dry_run))
        return self.statuses.get(source, 0)


@pytest.fixture(scope="function")
def fake_client() -> FakeTransferClient:
    """
    Provide a fresh recording transfer client.

    Returns:
        FakeTransferClient: A client with no recorded calls.
    """
    return FakeTransferClient()


@pytest.fixture(scope="function")
def make_config() -> Callable[..., Config]:
    """
    Provide a factory for run configurations.

    Returns:
        A function accepting a copy list and `dry_run`, returning a `Config`.
    """

    def _creator(copy_list: str, dry_run: bool = False) -> Config:
        return Config(copy_list=copy_list, app=AppConfig(dry_run=dry_run))

    return _creator


@pytest.fixture(scope="function")
def local_tree() -> Generator[Callable[[Path, List[str]], Path], None, None]:
    """
    Provide a factory that writes small text files under a base directory.

    Yields:
        A factory accepting a base path and relative file names, returning
        the base path.
    """

    def _creator(base_path: Path, names: List[str]) -> Path:
        for name in names:
            p: Path = base_path / name
            p.parent.mkdir(exist_ok=True, parents=True)
            p.write_text(f"content of {name}")
        return base_path

    yield _creator
