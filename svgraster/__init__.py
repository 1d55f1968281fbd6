"""svgraster - batch SVG to PNG conversion through a headless browser."""

__version__ = "1.0.0"
