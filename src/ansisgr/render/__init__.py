"""Renderers turning (Format, text) segments into presentation output."""
