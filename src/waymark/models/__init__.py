"""
Data models for waymark search.

This module contains the core data structures shared by the query compiler
and the display renderer.
"""

from .query import QueryToken, QueryTokenKind, FilterSpec, ExclusionSet
from .record import WaymarkRecord, WaymarkSignals
from .render import RenderToken, RenderTokenKind, WrapConfig, AlignmentContext, RenderOptions

__all__ = [
    'QueryToken',
    'QueryTokenKind',
    'FilterSpec',
    'ExclusionSet',
    'WaymarkRecord',
    'WaymarkSignals',
    'RenderToken',
    'RenderTokenKind',
    'WrapConfig',
    'AlignmentContext',
    'RenderOptions'
]
