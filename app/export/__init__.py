from .pdf_export import ExportError, export_file_name, render_preview_pdf

__all__ = ["ExportError", "export_file_name", "render_preview_pdf"]
