"""Daily AWS cost reports to Slack."""

__version__ = '1.0.0'
