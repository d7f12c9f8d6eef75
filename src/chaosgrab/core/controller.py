"""
chaosgrab Orchestrator: runs the end-to-end pipeline.

Workspace setup, index fetch, per-entry download and extraction, then
aggregation of every text file. Entries are processed one at a time.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import requests

from .. import __version__
from .aggregator import TextAggregator
from .archive_retriever import ArchiveRetriever
from .errors import ChaosGrabError
from .extractor import ArchiveExtractor
from .index_client import IndexClient
from .logger import create_error_tracker
from .results import EntryResult, EntryStatus, IndexEntry, ProcessingReport, RunReport
from ..utils.workspace import Workspace


DEFAULT_INDEX_URL = "https://chaos-data.projectdiscovery.io/index.json"


@dataclass
class RunConfig:
    index_url: str = DEFAULT_INDEX_URL
    workspace_dir: str = "AllChaosData"
    output_dir: str = "."
    output_name: str = "everything.txt"
    text_suffix: str = ".txt"
    request_timeout: float = 60.0
    chunk_size: int = 64 * 1024
    user_agent: str = f"chaosgrab/{__version__}"
    log_dir: Optional[str] = None

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir) / self.output_name


class ChaosController:
    def __init__(self,
                 config: RunConfig,
                 logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._stop_event = threading.Event()
        self.session = session or requests.Session()
        self.index = IndexClient(timeout=config.request_timeout, user_agent=config.user_agent,
                                 session=self.session)
        self.retriever = ArchiveRetriever(timeout=config.request_timeout, chunk_size=config.chunk_size,
                                          user_agent=config.user_agent, session=self.session,
                                          stop_event=self._stop_event)
        self.extractor = ArchiveExtractor(chunk_size=config.chunk_size)
        self.aggregator = TextAggregator(suffix=config.text_suffix, chunk_size=config.chunk_size)
        self.workspace = Workspace(config.workspace_dir)
        self.errors = create_error_tracker('controller')

    def stop(self):
        self._stop_event.set()

    def run(self, progress: Optional[Callable[[object], None]] = None) -> RunReport:
        """
        Run the whole pipeline.

        Raises:
            WorkspaceError: If the workspace root cannot be created
            IndexFetchError: If the index cannot be fetched or decoded
            AggregationError: If the output file cannot be created
        """
        self.workspace.ensure()

        if progress:
            progress("Fetching index...")
        entries = self.index.fetch_index(self.config.index_url)
        if progress:
            progress({"type": "index", "total": len(entries)})

        report = self.process_entries(entries, progress)

        if progress:
            progress("Aggregating text files...")
        aggregation = self.aggregator.aggregate(self.workspace.root, self.config.output_path)

        self.logger.info(
            f"Run complete: {len(report.succeeded)} succeeded, {len(report.failed)} failed, "
            f"{len(report.cancelled)} cancelled; {aggregation.files_included} text files included, "
            f"{aggregation.files_skipped} skipped"
        )
        summary = self.errors.get_error_summary()
        if summary['total_errors']:
            self.logger.info(f"Errors by type: {summary['error_types']}")

        return RunReport(entries=report, aggregation=aggregation)

    def process_entries(self,
                        entries: List[IndexEntry],
                        progress: Optional[Callable[[object], None]] = None) -> ProcessingReport:
        """Download and extract every entry, recording each outcome."""
        report = ProcessingReport()
        total = len(entries)

        for idx, entry in enumerate(entries, 1):
            if self._stop_event.is_set():
                report.add(EntryResult(entry=entry, status=EntryStatus.CANCELLED))
                continue

            self.logger.info(f"Processing {entry.name}...")
            if progress:
                progress({"type": "entry", "index": idx, "total": total, "name": entry.name,
                          "stage": "processing"})

            result = self.process_entry(entry)
            report.add(result)

            if progress:
                progress({"type": "entry", "index": idx, "total": total, "name": entry.name,
                          "stage": result.status.value})

        if report.cancelled:
            self.logger.warning(f"Stopped early; {len(report.cancelled)} entries not processed")
        return report

    def process_entry(self, entry: IndexEntry) -> EntryResult:
        """Retrieve and unpack one entry; failures are recorded, not raised."""
        try:
            target = self.workspace.entry_dir(entry.name)
            with self.retriever.download(entry.location) as archive_path:
                self.workspace.create_entry_dir(entry.name)
                files = self.extractor.extract(archive_path, target)
        except ChaosGrabError as e:
            status = EntryStatus.CANCELLED if self._stop_event.is_set() else EntryStatus.FAILED
            self.errors.log_error(e, context=f"Failed to process {entry.name}", location=entry.location)
            return EntryResult(entry=entry, status=status, error=e)

        return EntryResult(entry=entry, status=EntryStatus.SUCCEEDED, files_extracted=files)

    def close(self):
        self.session.close()
