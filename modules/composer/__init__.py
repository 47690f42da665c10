"""
Composer module.

Composition stage of the render pipeline. Normalizes and concatenates scene
clips, burns per-scene captions, and appends a branded end card.
"""

from modules.composer.process import compose

__all__ = ["compose"]
