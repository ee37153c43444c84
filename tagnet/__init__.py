"""
Tagnet: Tag-Linked Item Network Explorer

This package turns a flat collection of tagged, illustrated items into
a similarity graph, condenses it into named clusters on demand, and
resolves user interactions into new graph states.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Immutable Item, GraphNode, GraphEdge, GraphSnapshot types and errors

2. ITEM STORE (store/)
   - Responsibility: Load and hold the read-only item collection
   - Outputs: Items, filtered views, per-dimension value lists
   - MUST NOT: Mutate items after load, build graphs

3. CORE GRAPH ENGINE (core/)
   - Responsibility: Similarity graph construction, cluster composition
   - Outputs: GraphSnapshot (immutable)
   - MUST NOT: Hold interaction state, position or style nodes

4. INTERACTION (interaction/)
   - Responsibility: (group_type, filter_tag) state machine
   - Outputs: Transition (next state + detail side effect)
   - MUST NOT: Build graphs

5. PRESENTATION (presentation/) and API (api/)
   - Responsibility: Render payloads, colour config, HTTP surface
   - MUST NOT: Change topology

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: records and snapshots are frozen
- Full rebuild: every state change re-derives the graph, never patches it
- Deterministic: identical store and state give identical snapshots
- Explicit errors: integrity failures raise, bad clicks are no-ops
"""

from .contracts import (
    DataIntegrityError, GroupDimension, GraphSnapshot, Item, TagSlots, TagnetError,
)
from .engine import EngineConfig, EngineResult, ExplorerEngine
from .interaction import Action, InteractionState
from .store import ItemStore, load_item_store

__all__ = [
    'DataIntegrityError', 'GroupDimension', 'GraphSnapshot', 'Item', 'TagSlots',
    'TagnetError', 'EngineConfig', 'EngineResult', 'ExplorerEngine',
    'Action', 'InteractionState', 'ItemStore', 'load_item_store',
]
