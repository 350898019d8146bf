"""
Presenters for goodtimes output: terminal summaries and the HTML report.
"""

from .console import ConsolePresenter
from .html_report import HtmlReportRenderer

__all__ = ["ConsolePresenter", "HtmlReportRenderer"]
