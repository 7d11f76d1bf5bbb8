"""
Controllers connecting the signing core to the Qt user interface.
"""
from .annotation_controller import AnnotationController
from .export_controller import ExportController
from .input_handler import UserInputHandler
from .pointer_controller import (
    GestureState,
    HitPart,
    PointerEvent,
    PointerInteractionController,
    PointerPhase,
)
from .view_controller import ViewController

__all__ = [
    'AnnotationController',
    'ExportController',
    'UserInputHandler',
    'GestureState',
    'HitPart',
    'PointerEvent',
    'PointerInteractionController',
    'PointerPhase',
    'ViewController',
]
