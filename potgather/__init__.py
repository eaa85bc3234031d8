"""Collect translatable strings from source trees into a gettext template."""

__version__ = "0.3.0"
