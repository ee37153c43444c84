"""
Presentation Layer

Responsibility:
Turn engine snapshots into render-ready views for the drawing surface.

PRINCIPLES:
1. Immutable (Frozen) view types
2. No graph logic
3. Styling is configuration, passed in
"""

from .config import ClusterStyle, PresentationConfig, default_cluster_styles
from .graph import DetailView, NetworkGraphView, RenderEdge, RenderNode
from .mapper import ViewMapper

__all__ = [
    'ClusterStyle', 'PresentationConfig', 'default_cluster_styles',
    'DetailView', 'NetworkGraphView', 'RenderEdge', 'RenderNode',
    'ViewMapper',
]
