"""Import analysis runs for boundarymap."""

from analysis.imports import ImportAnalysis, analyze_imports
from analysis.siblings import SiblingRun, analyze_sibling_directories

__all__ = [
    "ImportAnalysis",
    "SiblingRun",
    "analyze_imports",
    "analyze_sibling_directories",
]
