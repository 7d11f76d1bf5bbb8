"""
Inkseal PDF - place signatures, stamps and images on PDF pages.
"""

__version__ = "1.0.0"
