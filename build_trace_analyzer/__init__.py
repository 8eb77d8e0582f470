"""
Build Trace Analyzer - Compiler -ftime-trace Analysis Tool
"""

__version__ = "1.0.0"

from .core.analyzer import BuildAnalyzer
from .core.types import AnalyzerConfig, BuildEventType

__all__ = ["BuildAnalyzer", "AnalyzerConfig", "BuildEventType"]
