"""solcpack CLI — Typer-based command-line interface.

Provides the ``solcpack`` command with the CNB ``detect`` and ``build``
phases plus inspection helpers for launch processes and layer metadata.

All output uses Rich for formatted terminal display.
"""
