"""
Data records passed between pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class IndexEntry:
    name: str
    location: str


class EntryStatus(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class EntryResult:
    entry: IndexEntry
    status: EntryStatus
    error: Optional[Exception] = None
    files_extracted: int = 0

    @property
    def ok(self) -> bool:
        return self.status is EntryStatus.SUCCEEDED


@dataclass
class ProcessingReport:
    """Outcome of every index entry, in index order."""

    results: List[EntryResult] = field(default_factory=list)

    def add(self, result: EntryResult) -> None:
        self.results.append(result)

    @property
    def succeeded(self) -> List[EntryResult]:
        return [r for r in self.results if r.status is EntryStatus.SUCCEEDED]

    @property
    def failed(self) -> List[EntryResult]:
        return [r for r in self.results if r.status is EntryStatus.FAILED]

    @property
    def cancelled(self) -> List[EntryResult]:
        return [r for r in self.results if r.status is EntryStatus.CANCELLED]

    def __len__(self) -> int:
        return len(self.results)


@dataclass
class AggregationResult:
    output_path: Path
    files_included: int = 0
    files_skipped: int = 0
    bytes_written: int = 0


@dataclass
class RunReport:
    entries: ProcessingReport
    aggregation: AggregationResult
