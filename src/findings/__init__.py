"""Finding aggregation for boundarymap."""

from findings.aggregate import FindingSet

__all__ = ["FindingSet"]
