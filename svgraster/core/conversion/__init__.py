"""Single-file conversion."""

from .task import run_conversion

__all__ = ["run_conversion"]
