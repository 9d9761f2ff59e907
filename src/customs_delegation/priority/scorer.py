"""
File priority scoring implementation.
"""

from dataclasses import dataclass
from typing import Optional

from ..schemas.extraction import ExtractedData


@dataclass(frozen=True)
class PriorityWeights:
    """Additive weights for file priority.

    Ordered by weight: a manifest dominates everything else, entity counts
    break ties between similar files, raw rows only break remaining ties.
    """

    declaration: float = 100.0
    enterprise: float = 20.0
    per_customer: float = 10.0
    per_goods_item: float = 5.0
    per_row: float = 0.1


class PriorityScorer:
    """
    Scores how authoritative and complete a file's extraction is.

    Higher = more authoritative. Customs manifests are the government-facing
    source and must win over commercial documents.
    """

    def __init__(self, weights: Optional[PriorityWeights] = None):
        self.weights = weights or PriorityWeights()

    def score(self, data: ExtractedData) -> float:
        weights = self.weights
        score = 0.0

        if data.declaration is not None:
            score += weights.declaration
        if data.enterprise is not None:
            score += weights.enterprise
        if data.customers:
            score += len(data.customers) * weights.per_customer
        if data.goods:
            score += len(data.goods) * weights.per_goods_item

        score += data.total_row_count * weights.per_row
        return score


def calculate_file_priority(
    data: ExtractedData, weights: Optional[PriorityWeights] = None
) -> float:
    """Priority score for one file's extraction."""
    return PriorityScorer(weights).score(data)
