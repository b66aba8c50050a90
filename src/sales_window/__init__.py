"""Sales window report: sum spreadsheet sales inside a chosen time window."""

__version__ = "0.1.0"
