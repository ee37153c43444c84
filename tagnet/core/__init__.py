"""
Core Graph Engine

RESPONSIBILITY: Item similarity graph construction and cluster composition
ALLOWED INPUTS: Items from the store, a grouping dimension
OUTPUTS: GraphSnapshot (immutable)

WHAT THIS LAYER MUST NOT DO:
============================
- Hold interaction state
- Position nodes (layout belongs to the rendering side)
- Assign colours or shapes
"""

from .topology import (
    SimilarityGraphBuilder, GraphMetrics, compute_metrics, snapshot_metrics, to_snapshot,
)
from .clustering import ClusterComposer

__all__ = [
    'SimilarityGraphBuilder', 'GraphMetrics', 'ClusterComposer',
    'compute_metrics', 'snapshot_metrics', 'to_snapshot',
]
