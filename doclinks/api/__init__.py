"""doclinks API layer: commands returning StageResult objects."""

from .StageResult import StageResult

__all__ = ["StageResult"]
