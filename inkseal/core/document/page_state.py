"""
Per-document view state: current page, selected pages and render scale.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from inkseal.core.annotations.models import ScaleInfo


@dataclass
class PageRenderState:
    """View state owned by one signing session."""
    total_pages: int = 0
    current_page: int = 1
    selected_pages: List[int] = field(default_factory=list)
    scale_info: Optional[ScaleInfo] = None

    def reset(self, total_pages: int) -> None:
        """Start over for a newly loaded document with page 1 selected."""
        self.total_pages = total_pages
        self.current_page = 1
        self.selected_pages = [1] if total_pages > 0 else []
        self.scale_info = None

    def is_valid_page(self, page: int) -> bool:
        return 1 <= page <= self.total_pages

    def set_current_page(self, page: int) -> bool:
        if not self.is_valid_page(page) or page == self.current_page:
            return False
        self.current_page = page
        return True

    def toggle_page_selection(self, page: int) -> List[int]:
        """Add or remove a page from the sorted selection."""
        if page in self.selected_pages:
            self.selected_pages = [p for p in self.selected_pages if p != page]
        elif self.is_valid_page(page):
            self.selected_pages = sorted(self.selected_pages + [page])
        return self.selected_pages

    def update_scale(self, scale_info: ScaleInfo) -> None:
        self.scale_info = scale_info

    @property
    def has_scale(self) -> bool:
        return self.scale_info is not None
