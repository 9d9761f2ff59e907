"""Delegation pipeline orchestration service.

Runs one batch of uploaded spreadsheet files end to end:
- Classifies every sheet of every file
- Extracts enterprise, customer, manifest and goods records per file
- Scores each file's priority
- Merges all files into one authoritative record set
- Maps the merged data to the delegation letter and agreements

The pipeline performs no I/O except in run_paths, which reads workbooks
from disk before handing their sheets to run.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from customs_delegation.classification import SheetClassifier
from customs_delegation.config import Config
from customs_delegation.extractors import ExtractorRouter
from customs_delegation.mapping import DelegationMapper
from customs_delegation.merging import DataMerger
from customs_delegation.priority import PriorityScorer
from customs_delegation.readers import read_workbook
from customs_delegation.schemas import (
    ExtractedData,
    MappingResult,
    MergedData,
    ScoredFile,
    SheetClassification,
    SheetData,
    TypedSheet,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileExtraction:
    """Per-file result: sheet verdicts, extracted records and priority."""

    file_name: str
    classifications: tuple[SheetClassification, ...]
    data: ExtractedData
    priority: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "classifications": [c.to_dict() for c in self.classifications],
            "data": self.data.to_dict(),
            "priority": self.priority,
        }


@dataclass(frozen=True)
class DelegationRun:
    """Result of one pipeline run over a batch of files."""

    files: tuple[FileExtraction, ...]
    merged: MergedData
    mapping: MappingResult
    duration_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [f.to_dict() for f in self.files],
            "merged": self.merged.to_dict(),
            "mapping": self.mapping.to_dict(),
            "duration_ms": self.duration_ms,
        }


class DelegationPipeline:
    """Orchestrates classification, extraction, scoring, merge and mapping.

    Usage:
        pipeline = DelegationPipeline(config)
        run = pipeline.run([("invoice.xlsx", sheets), ...])
        run.mapping.delegation_letter
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

        self.classifier = SheetClassifier(search_rows=self.config.extraction.header_search_rows)
        self.router = ExtractorRouter(self.config.extraction)
        self.scorer = PriorityScorer()
        self.merger = DataMerger(self.config.merge, self.scorer)
        self.mapper = DelegationMapper(self.config.delegation, self.config.mapping)

    def process_file(self, file_name: str, sheets: Sequence[SheetData]) -> FileExtraction:
        """Classify, extract and score one file."""
        classifications = tuple(
            self.classifier.classify(sheet.name, sheet.rows) for sheet in sheets
        )
        typed = tuple(
            TypedSheet(name=sheet.name, sheet_type=verdict.sheet_type, rows=sheet.rows)
            for sheet, verdict in zip(sheets, classifications)
        )
        data = self.router.extract(typed)
        priority = self.scorer.score(data)

        logger.info(
            f"{file_name}: {len(sheets)} sheet(s) "
            f"[{', '.join(c.sheet_type.value for c in classifications)}], "
            f"priority {priority:g}"
        )
        return FileExtraction(
            file_name=file_name,
            classifications=classifications,
            data=data,
            priority=priority,
        )

    def run(
        self,
        files: Sequence[tuple[str, Sequence[SheetData]]],
        today: date | None = None,
    ) -> DelegationRun:
        """Run the full pipeline over (file name, sheets) pairs.

        Args:
            files: Batch of files in upload order
            today: Sign date for the letter (defaults to the current date)

        Returns:
            DelegationRun with per-file results, merged data and mapping
        """
        start = time.monotonic()

        extractions = tuple(self.process_file(name, sheets) for name, sheets in files)
        merged = self.merger.merge_scored(
            [ScoredFile(e.file_name, e.data, e.priority) for e in extractions]
        )
        mapping = self.mapper.map(merged, today)

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            f"Pipeline finished: {len(extractions)} file(s), "
            f"{len(mapping.delegation_agreements)} agreement(s), "
            f"{len(mapping.warnings)} warning(s) in {duration_ms}ms"
        )

        return DelegationRun(
            files=extractions,
            merged=merged,
            mapping=mapping,
            duration_ms=duration_ms,
        )

    def run_paths(
        self, paths: Sequence[str | Path], today: date | None = None
    ) -> DelegationRun:
        """Read workbooks from disk, then run the pipeline.

        Raises:
            WorkbookReadError: If any file cannot be read
        """
        files = [(Path(p).name, read_workbook(p)) for p in paths]
        return self.run(files, today)
