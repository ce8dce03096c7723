"""Rolling-window statistics for the CBR daily exchange rate publication."""

__version__ = "0.1.0"
