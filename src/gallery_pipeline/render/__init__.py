"""HTML rendering of the gallery index."""

from .renderer import JinjaTemplateRenderer

__all__ = ["JinjaTemplateRenderer"]
