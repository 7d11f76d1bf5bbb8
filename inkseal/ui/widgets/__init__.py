from .page_canvas import PageCanvas, pixmap_to_qimage
from .page_sidebar import PageSidebar

__all__ = ['PageCanvas', 'PageSidebar', 'pixmap_to_qimage']
