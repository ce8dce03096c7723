"""Report rendering."""

from currency_window.ui.report import render_report

__all__ = ["render_report"]
