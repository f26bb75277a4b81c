"""Enumeration types for loan exports."""

from enum import Enum


class ExportType(str, Enum):
    SCHEDULE = "schedule"
    STATEMENT = "statement"


class ExportFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"
    PDF = "pdf"
