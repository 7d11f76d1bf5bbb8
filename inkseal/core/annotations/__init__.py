"""
Annotation system for signing PDF documents.
"""
from .models import Annotation, ScaleInfo, SignatureImage
from .store import AnnotationStore
from .history import CheckpointHistory, Placement

__all__ = [
    'Annotation',
    'ScaleInfo',
    'SignatureImage',
    'AnnotationStore',
    'CheckpointHistory',
    'Placement',
]
