"""
Graph Visualization Contracts

Responsibility:
Deterministic transformation of a GraphSnapshot into a renderable view.
Positions are not part of the view; layout belongs to the drawing surface.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RenderNode:
    """Renderable graph node."""
    node_id: str
    label: str
    shape: str
    is_cluster: bool
    image: Optional[str] = None
    size: Optional[int] = None
    background: Optional[str] = None
    border: Optional[str] = None
    font_color: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        data = {"id": self.node_id, "label": self.label, "shape": self.shape}
        if self.image is not None:
            data["image"] = self.image
        if self.size is not None:
            data["size"] = self.size
        if self.background is not None:
            data["color"] = {"background": self.background, "border": self.border}
        if self.font_color is not None:
            data["font"] = {"color": self.font_color}
        if self.tags:
            data["tags"] = list(self.tags)
        return data


@dataclass(frozen=True)
class RenderEdge:
    """Renderable graph edge."""
    edge_id: str
    source_id: str
    target_id: str

    def to_dict(self) -> dict:
        return {"id": self.edge_id, "from": self.source_id, "to": self.target_id}


@dataclass(frozen=True)
class DetailView:
    """Content of the detail (modal) view for a selected item."""
    item_id: str
    title: str
    img: str
    description: str
    tag_buttons: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "title": self.title,
            "img": self.img,
            "description": self.description,
            "tags": list(self.tag_buttons),
        }


@dataclass(frozen=True)
class NetworkGraphView:
    """Complete payload for one interaction state."""
    view_id: str
    nodes: Tuple[RenderNode, ...]
    edges: Tuple[RenderEdge, ...]
    group_type: Optional[str]
    filter_tag: str
    show_grouping_control: bool
    detail: Optional[DetailView] = None
