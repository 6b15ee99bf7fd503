"""
Core infrastructure for sitewright.
"""
from sitewright.core.registry import registry, ServiceRegistry

__all__ = ['registry', 'ServiceRegistry']
