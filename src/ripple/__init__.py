"""Ripple - blast radius analysis for JavaScript and TypeScript changes."""

__version__ = "0.1.0"
