"""
Snapshot to View Mapper

Converts engine snapshots into renderable views and JSON payloads.

MAPPING BOUNDARY:
=================
This is the ONLY place where engine types become render types.

MAPPING RULES:
==============
1. Preserve snapshot ordering
2. Styling comes from PresentationConfig, never from the engine
3. Cluster-nodes carry no image and no tags
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from ..contracts.graph import GraphNode, GraphSnapshot
from ..contracts.items import Item
from ..interaction import InteractionState
from .config import PresentationConfig
from .graph import DetailView, NetworkGraphView, RenderEdge, RenderNode


class ViewMapper:
    """Maps snapshots to NetworkGraphView and plain-dict payloads."""

    def __init__(self, config: Optional[PresentationConfig] = None):
        self._config = config or PresentationConfig()

    @property
    def config(self) -> PresentationConfig:
        return self._config

    def map_node(self, node: GraphNode) -> RenderNode:
        if node.is_cluster:
            style = self._config.cluster_styles.get(node.dimension)
            return RenderNode(
                node_id=node.node_id,
                label=node.label,
                shape=self._config.cluster_node_shape,
                is_cluster=True,
                background=style.background if style else None,
                border=style.border if style else None,
                font_color=self._config.cluster_font_color,
            )
        return RenderNode(
            node_id=node.node_id,
            label=node.label,
            shape=self._config.item_node_shape,
            is_cluster=False,
            image=node.item.img if node.item else None,
            size=self._config.item_node_size,
            tags=node.tags,
        )

    def map_detail(self, item: Optional[Item]) -> Optional[DetailView]:
        if item is None:
            return None
        return DetailView(
            item_id=item.id,
            title=item.title,
            img=item.img,
            description=item.description,
            tag_buttons=item.tags.values(),
        )

    def map_snapshot(
        self,
        snapshot: GraphSnapshot,
        state: Optional[InteractionState] = None,
        detail_item: Optional[Item] = None
    ) -> NetworkGraphView:
        state = state or InteractionState(
            group_type=None if snapshot.filter_tag else snapshot.group_type,
            filter_tag=snapshot.filter_tag,
        )
        return NetworkGraphView(
            view_id=f"v_{snapshot.state_hash[:8]}",
            nodes=tuple(self.map_node(n) for n in snapshot.nodes),
            edges=tuple(
                RenderEdge(
                    edge_id=f"e{index}",
                    source_id=edge.source,
                    target_id=edge.target,
                )
                for index, edge in enumerate(snapshot.edges)
            ),
            group_type=state.group_type.value if state.group_type else None,
            filter_tag=state.filter_tag,
            show_grouping_control=state.grouping_control_visible,
            detail=self.map_detail(detail_item),
        )

    def to_payload(self, view: NetworkGraphView) -> Dict[str, Any]:
        """JSON-ready payload for the drawing surface and UI chrome."""
        return {
            "view_id": view.view_id,
            "state": {
                "group_type": view.group_type,
                "filter_tag": view.filter_tag,
                "show_grouping_control": view.show_grouping_control,
            },
            "nodes": [n.to_dict() for n in view.nodes],
            "edges": [e.to_dict() for e in view.edges],
            "options": self._config.network_options(),
            "detail": view.detail.to_dict() if view.detail else None,
        }
