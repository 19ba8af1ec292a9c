"""Exporter SPI and implementations."""

from .base import BaseExporter
from .csv_exporter import FIELDNAMES, CsvExporter, write_results

__all__ = ["BaseExporter", "CsvExporter", "FIELDNAMES", "write_results"]
