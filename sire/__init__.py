"""
SIRE package
============

This package contains the Storm Impact Ranking Engine (SIRE).

- The CLI entry point is in `sire/cli.py`.
- Event-type cleaning (the rule cascade) is in `sire/normalizer.py`.
- The pipeline (transform, aggregate, rank) is driven by `sire/engine.py`.
- Dataset loading is in `sire/loader.py`.
"""

__version__ = '0.3.0'
