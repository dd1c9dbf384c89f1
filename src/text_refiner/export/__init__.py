"""Export module for text-refiner."""
from text_refiner.export.exporter import ExportFormat, export_document, render_export
from text_refiner.export.markdown import strip_markdown

__all__ = ["ExportFormat", "export_document", "render_export", "strip_markdown"]
