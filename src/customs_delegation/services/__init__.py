"""
Services module.

Orchestrates the delegation pipeline over a batch of files.
"""

from .pipeline import DelegationPipeline, DelegationRun, FileExtraction

__all__ = [
    "DelegationPipeline",
    "DelegationRun",
    "FileExtraction",
]
