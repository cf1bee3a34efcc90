"""Import and export extraction for JavaScript and TypeScript sources."""

from ripple.inspector.core import inspect_file
from ripple.inspector.models import SourceFacts, detect_language

__all__ = ["SourceFacts", "detect_language", "inspect_file"]
