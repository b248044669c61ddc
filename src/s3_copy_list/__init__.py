# src/s3_copy_list/__init__.py
"""
s3-copy-list: copy a static list of objects between S3 and local paths.

This package reads `source:destination` pairs from a single configuration
value and, one pair at a time, copies single objects, synchronizes trees or
performs local copies, reporting a final tally.

The primary entry point for programmatic use is the `CopyOrchestrator` class.
"""

from typing import List

from s3_copy_list.orchestrator import CopyOrchestrator

__all__: List[str] = ["CopyOrchestrator"]
