"""
Data merger - reconciles the extractions of every file in a batch into one
authoritative MergedData.

Files are scored once and sorted once (ascending priority, stable). Every
multi-record merge is a fold over that order, so a later entry always comes
from a file of equal or higher priority than the entry it replaces.

Rules:
- Enterprise / manifest: atomic, taken whole from the highest-priority file
- Customers: keyed by customs code (else name), later entry replaces earlier
- Goods: keyed by match key, later entry merges field-wise into earlier;
  a field the later entry leaves unset keeps the earlier value
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

from ..config import MergeConfig
from ..priority import PriorityScorer
from ..schemas.extraction import (
    GOODS_MERGE_FIELDS,
    CustomerInfo,
    DeclarationInfo,
    EnterpriseInfo,
    GoodsItem,
    SourceFile,
)
from ..schemas.merge import GoodsConflict, MergedData, MergeLogEntry, ScoredFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Held:
    """A record in the fold state, with the file it came from."""

    record: Any
    source: str
    priority: float


@dataclass(frozen=True)
class GoodsMergeResult:
    goods: tuple[GoodsItem, ...] = ()
    log: tuple[MergeLogEntry, ...] = ()
    conflicts: tuple[GoodsConflict, ...] = ()


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def _sort_ascending(files: Sequence[ScoredFile]) -> list[ScoredFile]:
    return sorted(files, key=lambda f: f.priority)


def score_files(
    files: Sequence[SourceFile], scorer: Optional[PriorityScorer] = None
) -> tuple[ScoredFile, ...]:
    """Attach a priority score to every file, preserving input order."""
    scorer = scorer or PriorityScorer()
    return tuple(
        ScoredFile(file_name=f.file_name, data=f.data, priority=scorer.score(f.data))
        for f in files
    )


def _pick_highest(
    files: Sequence[ScoredFile], attribute: str, label: str
) -> tuple[Any, tuple[MergeLogEntry, ...]]:
    candidates = [f for f in files if getattr(f.data, attribute) is not None]
    if not candidates:
        return None, ()

    # max() keeps the earliest file among equal priorities
    selected = max(candidates, key=lambda f: f.priority)
    entry = MergeLogEntry(
        field=label,
        source_file=selected.file_name,
        priority_score=selected.priority,
        reason=f"选择优先级最高的文件（优先级: {selected.priority:g}）",
    )
    return getattr(selected.data, attribute), (entry,)


def merge_enterprise_info(
    files: Sequence[ScoredFile],
) -> tuple[Optional[EnterpriseInfo], tuple[MergeLogEntry, ...]]:
    """Take the enterprise record of the highest-priority file."""
    return _pick_highest(files, "enterprise", "enterprise")


def merge_declaration_info(
    files: Sequence[ScoredFile],
) -> tuple[Optional[DeclarationInfo], tuple[MergeLogEntry, ...]]:
    """Take the manifest record of the highest-priority file."""
    return _pick_highest(files, "declaration", "declaration")


def merge_customer_info(
    files: Sequence[ScoredFile],
) -> tuple[Optional[tuple[CustomerInfo, ...]], tuple[MergeLogEntry, ...]]:
    """
    Deduplicate customers across files by customs code (else name).

    Returns None when no file carried a customer sheet at all.
    """
    return _sweep_customers(_sort_ascending(files))


def _sweep_customers(
    ordered: Sequence[ScoredFile],
) -> tuple[Optional[tuple[CustomerInfo, ...]], tuple[MergeLogEntry, ...]]:
    if all(f.data.customers is None for f in ordered):
        return None, ()

    held: dict[str, _Held] = {}
    log: list[MergeLogEntry] = []

    for scored in ordered:
        for customer in scored.data.customers or ():
            key = customer.merge_key
            previous = held.get(key)

            if previous is None:
                reason = f"新增客户 {customer.name}（编码: {customer.customs_code}）"
            else:
                reason = (
                    f"客户 {customer.name}（编码: {customer.customs_code}）"
                    f"替换来自 {previous.source} 的记录（优先级: {scored.priority:g}）"
                )

            held[key] = _Held(customer, scored.file_name, scored.priority)
            log.append(MergeLogEntry("customer", scored.file_name, scored.priority, reason))

    return tuple(h.record for h in held.values()), tuple(log)


def _merge_goods_fields(
    existing: _Held,
    incoming: GoodsItem,
    source: str,
    detect_conflicts: bool,
) -> tuple[GoodsItem, tuple[GoodsConflict, ...]]:
    """Prefer the incoming value per field, fall back to the existing one."""
    old: GoodsItem = existing.record
    changes = {}
    conflicts = []

    for name in GOODS_MERGE_FIELDS:
        new_value = getattr(incoming, name)
        old_value = getattr(old, name)
        if _is_set(new_value):
            changes[name] = new_value
            if detect_conflicts and _is_set(old_value) and old_value != new_value:
                conflicts.append(
                    GoodsConflict(
                        match_key=old.match_key,
                        field=name,
                        kept_value=new_value,
                        discarded_value=old_value,
                        kept_source=source,
                        discarded_source=existing.source,
                    )
                )
        else:
            changes[name] = old_value

    return replace(old, **changes), tuple(conflicts)


def merge_goods_items(
    files: Sequence[ScoredFile], config: Optional[MergeConfig] = None
) -> GoodsMergeResult:
    """
    Merge goods lines across files by match key.

    Smart matching order: HS code > item code > goods name (see
    generate_match_key). Output order is first-sighting order in the
    ascending-priority sweep.
    """
    return _sweep_goods(_sort_ascending(files), config or MergeConfig())


def _sweep_goods(ordered: Sequence[ScoredFile], config: MergeConfig) -> GoodsMergeResult:
    held: dict[str, _Held] = {}
    log: list[MergeLogEntry] = []
    conflicts: list[GoodsConflict] = []

    for scored in ordered:
        for item in scored.data.goods or ():
            key = item.match_key
            existing = held.get(key)

            if existing is None:
                held[key] = _Held(item, scored.file_name, scored.priority)
                log.append(
                    MergeLogEntry(
                        field="goods",
                        source_file=scored.file_name,
                        priority_score=scored.priority,
                        reason=f"新增商品: {item.goods_name}（匹配键: {key}）",
                    )
                )
                continue

            merged, found = _merge_goods_fields(
                existing, item, scored.file_name, config.detect_conflicts
            )
            for conflict in found:
                logger.debug(
                    f"Goods {key}: {conflict.field} {conflict.discarded_value!r} "
                    f"({conflict.discarded_source}) replaced by {conflict.kept_value!r} "
                    f"({conflict.kept_source})"
                )

            if scored.priority > existing.priority:
                basis = "优先级更高"
            else:
                basis = "同等优先级，后出现者覆盖"
            held[key] = _Held(merged, scored.file_name, scored.priority)
            log.append(
                MergeLogEntry(
                    field="goods",
                    source_file=scored.file_name,
                    priority_score=scored.priority,
                    reason=f"更新商品: {merged.goods_name}（匹配键: {key}，{basis}）",
                )
            )
            conflicts.extend(found)

    return GoodsMergeResult(
        goods=tuple(h.record for h in held.values()),
        log=tuple(log),
        conflicts=tuple(conflicts),
    )


class DataMerger:
    """Merges a batch of file extractions into one MergedData."""

    def __init__(
        self,
        config: Optional[MergeConfig] = None,
        scorer: Optional[PriorityScorer] = None,
    ):
        self.config = config or MergeConfig()
        self.scorer = scorer or PriorityScorer()

    def merge(self, files: Sequence[SourceFile]) -> MergedData:
        return self.merge_scored(score_files(files, self.scorer))

    def merge_scored(self, scored: Sequence[ScoredFile]) -> MergedData:
        """Merge files whose priority is already known."""
        ordered = _sort_ascending(scored)

        enterprise, enterprise_log = merge_enterprise_info(scored)
        customers, customer_log = _sweep_customers(ordered)
        declaration, declaration_log = merge_declaration_info(scored)
        goods_result = _sweep_goods(ordered, self.config)

        has_goods = any(f.data.goods is not None for f in scored)

        merged = MergedData(
            enterprise=enterprise,
            customers=customers,
            declaration=declaration,
            goods=goods_result.goods if has_goods else None,
            total_row_count=sum(f.data.total_row_count for f in scored),
            merge_log=enterprise_log + customer_log + declaration_log + goods_result.log,
            source_file_names=tuple(f.file_name for f in scored),
            conflicts=goods_result.conflicts,
        )

        logger.info(
            f"Merged {len(scored)} file(s): {len(merged.goods or ())} goods item(s), "
            f"{len(merged.customers or ())} customer(s), "
            f"{len(merged.conflicts)} conflict(s)"
        )
        return merged


def merge_excel_data(
    files: Sequence[SourceFile], config: Optional[MergeConfig] = None
) -> MergedData:
    """Merge a batch of file extractions with the default priority weights."""
    return DataMerger(config).merge(files)
