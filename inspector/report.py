# Цей файл знаходиться в: inspector/report.py

import sys
from typing import List, Optional, TextIO

from inspector.config import INDENT_WIDTH
from inspector.models import SchemaUsage


def indent(level: int) -> str:
    return " " * (level * INDENT_WIDTH)


class ReportLog:
    """
    Друкує звіт у консоль і паралельно збирає всі надруковані рядки.
    """
    def __init__(self, stream: Optional[TextIO] = None, error_stream: Optional[TextIO] = None):
        self.stream = stream
        self.error_stream = error_stream
        self.lines: List[str] = []
        self.errors: List[str] = []

    def log(self, message: str = "") -> None:
        print(message, file=self.stream or sys.stdout)
        self.lines.append(message)

    def error(self, message: str) -> None:
        print(message, file=self.error_stream or sys.stderr)
        self.errors.append(message)


def _or(value: Optional[str], placeholder: str) -> str:
    return placeholder if value is None else value


def format_usage(usage: SchemaUsage) -> str:
    usage_kind = usage.usage_kind.value if usage.usage_kind is not None else None
    return (
        f"Schema: {_or(usage.schema_name, '<anonymous>')}, "
        f"Ref: {_or(usage.ref_path, '<inline>')}, "
        f"Usage: {_or(usage_kind, '<unknown>')}, "
        f"Path: {_or(usage.path, '<unknown>')}, "
        f"Operation: {_or(usage.operation_id, '<unknown>')}, "
        f"Parameter: {_or(usage.parameter_name, '')}, "
        f"Status: {_or(usage.status_code, '')}"
    )


def print_usage_map(usages: List[SchemaUsage], report: ReportLog) -> None:
    report.log()
    report.log("--- Schema Usage Map ---")
    for usage in usages:
        report.log(format_usage(usage))
