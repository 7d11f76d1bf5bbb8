from .color_button import ColorButton
from .signature_pad import SignaturePad, SignaturePadDialog
from .stamp_dialog import StampDialog

__all__ = ['ColorButton', 'SignaturePad', 'SignaturePadDialog', 'StampDialog']
