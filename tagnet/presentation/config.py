"""
Presentation configuration.

Colours, shapes and network options handed to the rendering surface.
None of these values affect graph topology.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

from ..contracts.base import GroupDimension


@dataclass(frozen=True)
class ClusterStyle:
    """Fill and border colour of a dimension's cluster-nodes."""
    background: str
    border: str

    def to_dict(self) -> dict:
        return {"background": self.background, "border": self.border}


def default_cluster_styles() -> Dict[GroupDimension, ClusterStyle]:
    return {
        GroupDimension.SPHERE: ClusterStyle(background="#d88383", border="#df6060"),
        GroupDimension.PERSON: ClusterStyle(background="#ddb874", border="#d19f33"),
        GroupDimension.PERIOD: ClusterStyle(background="#a37c62", border="#935a2c"),
        GroupDimension.THEME: ClusterStyle(background="#e6b27b", border="#ec8d2f"),
    }


@dataclass
class PresentationConfig:
    """Configuration for the render payload."""
    cluster_styles: Dict[GroupDimension, ClusterStyle] = field(default_factory=default_cluster_styles)
    item_node_size: int = 30
    item_node_shape: str = "image"
    cluster_node_shape: str = "box"
    node_font_size: int = 14
    node_font_face: str = "WDXL Lubrifont TC"
    node_font_color: str = "#dcdcdc"
    cluster_font_color: str = "#000000"
    node_border_width: int = 2
    edge_color: str = "#434343"
    edge_hover_color: str = "#4a4a4a"
    edge_highlight_color: str = "#787878"
    physics: bool = False

    def network_options(self) -> dict:
        """Options for a vis-network style drawing surface."""
        return {
            "physics": self.physics,
            "interaction": {
                "dragNodes": True,
                "dragView": True,
                "zoomView": True,
                "hover": True,
            },
            "nodes": {
                "font": {
                    "size": self.node_font_size,
                    "face": self.node_font_face,
                    "color": self.node_font_color,
                },
                "borderWidth": self.node_border_width,
            },
            "edges": {
                "color": {
                    "color": self.edge_color,
                    "hover": self.edge_hover_color,
                    "highlight": self.edge_highlight_color,
                },
                "smooth": False,
            },
        }
