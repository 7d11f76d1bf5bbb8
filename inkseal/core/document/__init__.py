"""
PDF document rendering, view state and export.
"""
from .page_state import PageRenderState
from .pdf_backend import PyMuPDFBackend, PageSize
from .pdf_exporter import ExportResult, ExportState, ExportStatus, PDFExporter, signed_filename
from .renderer import PageRenderer, RenderedPage, compute_render_scale

__all__ = [
    'PageRenderState',
    'PyMuPDFBackend',
    'PageSize',
    'ExportResult',
    'ExportState',
    'ExportStatus',
    'PDFExporter',
    'signed_filename',
    'PageRenderer',
    'RenderedPage',
    'compute_render_scale',
]
