"""
recordfsm: Record model for template-driven text scrapers.

Accumulates the fields a TextFSM-style template engine emits into records,
serializes them for output, and compares two record sets for template
regression testing.
"""

__version__ = "0.1.0"
