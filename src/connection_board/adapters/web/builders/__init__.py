"""Builders for web display."""

from .template_data_builder import NO_CONNECTION, TemplateDataBuilder

__all__ = ["NO_CONNECTION", "TemplateDataBuilder"]
