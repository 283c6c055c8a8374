"""scanpulse: live progress display for long-running network scans.

Runs the scanner (nmap by default), reads its stdout and stderr
concurrently, and keeps a single in-place status line with a progress
bar, completion estimate and latest stats, while open ports, warnings
and errors scroll above it.
"""

__version__ = "0.1.0"
__description__ = "Live progress display for long-running network scans"

from scanpulse.core.classifier import classify
from scanpulse.core.orchestrator import Orchestrator
from scanpulse.cli.app import app as cli

__all__ = ["Orchestrator", "classify", "cli", "__version__"]
