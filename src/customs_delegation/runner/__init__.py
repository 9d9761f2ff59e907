"""
CLI runner module.

Provides commands:
- classify: Show the detected type of each sheet
- extract: Print one file's extracted records
- generate: Merge files and export the delegation documents
- init-config: Write a default config file
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
