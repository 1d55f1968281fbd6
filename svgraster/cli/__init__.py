"""
svgraster CLI
Command-line interface for batch SVG to PNG conversion
"""

from svgraster import __version__

__all__ = ["__version__"]
