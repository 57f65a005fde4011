# medcon/common/llm/__init__.py
"""LLM module for the clinic summary report."""

from .report_service import ReportService

__all__ = ["ReportService"]
