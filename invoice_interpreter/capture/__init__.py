"""
Capture Module for the Invoice Interpretation Engine.

Boundary with the external OCR collaborator: concurrent page-level
recognition joined into one text block per capture.
"""

from .page_collector import PageTextCollector, PageRecognition

__all__ = ['PageTextCollector', 'PageRecognition']
