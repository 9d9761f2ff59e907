"""
Priority scoring module.

Ranks each source file by how authoritative its extracted data is.
"""

from .scorer import PriorityScorer, PriorityWeights, calculate_file_priority

__all__ = [
    "PriorityScorer",
    "PriorityWeights",
    "calculate_file_priority",
]
