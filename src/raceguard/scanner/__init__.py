"""Scanner — category classification and rule dispatch."""

from raceguard.scanner.classifier import classify
from raceguard.scanner.engine import analyze, analyze_file

__all__ = ["analyze", "analyze_file", "classify"]
