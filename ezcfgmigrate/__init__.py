"""Reading, converting and writing streaming source client configurations (0.x to 1.x XML)."""

__version__ = "1.0.0"