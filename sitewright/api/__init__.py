"""
Public API for sitewright.

This module provides a stable interface to access the pipeline components.
"""

from sitewright.api import generation

__all__ = ['generation']
