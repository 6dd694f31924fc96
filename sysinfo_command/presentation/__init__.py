"""Presentation layer - Renderers producing message payloads."""

from .renderers import EmbedRenderer, PlainTextRenderer, Renderer, select_renderer

__all__ = ["EmbedRenderer", "PlainTextRenderer", "Renderer", "select_renderer"]
