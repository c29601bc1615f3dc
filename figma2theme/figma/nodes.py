"""
Figma document model
Typed, read-only views over the Figma REST API file JSON
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

# Layout-only nodes; searched through, never matched as frames
CONTAINER_TYPES = ("GROUP", "SECTION", "COMPONENT_SET")


@dataclass(frozen=True)
class BoundingBox:
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "BoundingBox":
        raw = raw or {}
        return cls(
            x=raw.get("x") or 0,
            y=raw.get("y") or 0,
            width=raw.get("width") or 0,
            height=raw.get("height") or 0,
        )


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Color":
        return cls(
            r=raw.get("r", 0),
            g=raw.get("g", 0),
            b=raw.get("b", 0),
            a=raw.get("a", 1.0),
        )


@dataclass(frozen=True)
class Paint:
    type: str
    color: Optional[Color] = None
    opacity: float = 1.0
    visible: bool = True

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Paint":
        color = raw.get("color")
        return cls(
            type=raw.get("type", ""),
            color=Color.from_dict(color) if color else None,
            opacity=raw.get("opacity", 1.0),
            visible=raw.get("visible", True),
        )


@dataclass(frozen=True)
class Effect:
    type: str
    color: Optional[Color] = None
    offset_x: float = 0
    offset_y: float = 0
    radius: float = 0
    spread: float = 0
    visible: bool = True

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Effect":
        color = raw.get("color")
        offset = raw.get("offset") or {}
        return cls(
            type=raw.get("type", ""),
            color=Color.from_dict(color) if color else None,
            offset_x=offset.get("x", 0),
            offset_y=offset.get("y", 0),
            radius=raw.get("radius", 0),
            # older API responses omit spread
            spread=raw.get("spread") or 0,
            visible=raw.get("visible", True),
        )


@dataclass(frozen=True)
class LayoutGrid:
    pattern: str
    count: int = 0
    gutter_size: float = 0
    offset: float = 0
    section_size: float = 0
    visible: bool = True

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "LayoutGrid":
        return cls(
            pattern=raw.get("pattern", ""),
            count=raw.get("count", 0),
            gutter_size=raw.get("gutterSize", 0),
            offset=raw.get("offset", 0),
            section_size=raw.get("sectionSize", 0),
            visible=raw.get("visible", True),
        )


@dataclass(frozen=True)
class TypeStyle:
    font_family: str = ""
    font_size: float = 16
    font_weight: float = 400
    italic: bool = False
    letter_spacing: float = 0
    line_height_px: float = 0
    line_height_percent_font_size: Optional[float] = None
    line_height_unit: str = "INTRINSIC_%"
    text_decoration: str = "NONE"
    text_case: str = "ORIGINAL"

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "TypeStyle":
        raw = raw or {}
        return cls(
            font_family=raw.get("fontFamily", ""),
            font_size=raw.get("fontSize", 16),
            font_weight=raw.get("fontWeight", 400),
            italic=raw.get("italic", False),
            letter_spacing=raw.get("letterSpacing", 0),
            line_height_px=raw.get("lineHeightPx", 0),
            line_height_percent_font_size=raw.get("lineHeightPercentFontSize"),
            line_height_unit=raw.get("lineHeightUnit", ""),
            text_decoration=raw.get("textDecoration", "NONE"),
            text_case=raw.get("textCase", "ORIGINAL"),
        )


@dataclass(frozen=True)
class StyleMeta:
    """An entry of the file's style registry"""

    key: str
    name: str
    style_type: str
    description: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "StyleMeta":
        return cls(
            key=raw.get("key", ""),
            name=raw.get("name", ""),
            # the REST API uses styleType, some clients use style_type
            style_type=raw.get("styleType") or raw.get("style_type") or "",
            description=raw.get("description", ""),
        )


StyleRegistry = Dict[str, StyleMeta]


# Node variants


@dataclass(frozen=True)
class DocumentNode:
    id: str
    name: str
    children: Tuple["Node", ...] = ()
    type: str = "DOCUMENT"


@dataclass(frozen=True)
class CanvasNode:
    id: str
    name: str
    children: Tuple["Node", ...] = ()
    type: str = "CANVAS"


@dataclass(frozen=True)
class FrameNode:
    id: str
    name: str
    type: str = "FRAME"
    children: Tuple["Node", ...] = ()
    bounding_box: BoundingBox = field(default_factory=BoundingBox)
    styles: Dict[str, str] = field(default_factory=dict)
    layout_grids: Tuple[LayoutGrid, ...] = ()


@dataclass(frozen=True)
class ContainerNode:
    """GROUP, SECTION or COMPONENT_SET node"""

    id: str
    name: str
    type: str
    children: Tuple["Node", ...] = ()
    bounding_box: BoundingBox = field(default_factory=BoundingBox)


@dataclass(frozen=True)
class ComponentNode:
    id: str
    name: str
    children: Tuple["Node", ...] = ()
    bounding_box: BoundingBox = field(default_factory=BoundingBox)
    styles: Dict[str, str] = field(default_factory=dict)
    layout_grids: Tuple[LayoutGrid, ...] = ()
    type: str = "COMPONENT"


@dataclass(frozen=True)
class InstanceNode:
    id: str
    name: str
    children: Tuple["Node", ...] = ()
    type: str = "INSTANCE"


@dataclass(frozen=True)
class RectangleNode:
    id: str
    name: str
    bounding_box: BoundingBox = field(default_factory=BoundingBox)
    corner_radius: float = 0
    fills: Tuple[Paint, ...] = ()
    effects: Tuple[Effect, ...] = ()
    styles: Dict[str, str] = field(default_factory=dict)
    type: str = "RECTANGLE"


@dataclass(frozen=True)
class EllipseNode:
    id: str
    name: str
    bounding_box: BoundingBox = field(default_factory=BoundingBox)
    fills: Tuple[Paint, ...] = ()
    effects: Tuple[Effect, ...] = ()
    styles: Dict[str, str] = field(default_factory=dict)
    type: str = "ELLIPSE"


@dataclass(frozen=True)
class TextNode:
    id: str
    name: str
    characters: str = ""
    style: TypeStyle = field(default_factory=TypeStyle)
    styles: Dict[str, str] = field(default_factory=dict)
    bounding_box: BoundingBox = field(default_factory=BoundingBox)
    type: str = "TEXT"


@dataclass(frozen=True)
class IgnoredNode:
    """Any node type that carries no token information (vectors, lines, ...)"""

    id: str
    name: str
    type: str
    children: Tuple["Node", ...] = ()


Node = Union[
    DocumentNode,
    CanvasNode,
    FrameNode,
    ContainerNode,
    ComponentNode,
    InstanceNode,
    RectangleNode,
    EllipseNode,
    TextNode,
    IgnoredNode,
]


def _children(raw: Dict[str, Any]) -> Tuple[Node, ...]:
    return tuple(parse_node(child) for child in raw.get("children") or [])


def _style_map(raw: Dict[str, Any]) -> Dict[str, str]:
    styles = dict(raw.get("styles") or {})
    # the plural keys show up in some plugin exports
    for plural, singular in (("fills", "fill"), ("effects", "effect")):
        if plural in styles and singular not in styles:
            styles[singular] = styles[plural]
    return styles


def parse_node(raw: Dict[str, Any]) -> Node:
    """Convert a raw node dictionary into its typed variant"""
    node_type = raw.get("type", "")
    node_id = raw.get("id", "")
    name = raw.get("name", "")

    if node_type == "DOCUMENT":
        return DocumentNode(id=node_id, name=name, children=_children(raw))
    if node_type == "CANVAS":
        return CanvasNode(id=node_id, name=name, children=_children(raw))
    if node_type in CONTAINER_TYPES:
        return ContainerNode(
            id=node_id,
            name=name,
            type=node_type,
            children=_children(raw),
            bounding_box=BoundingBox.from_dict(raw.get("absoluteBoundingBox")),
        )
    if node_type == "FRAME":
        return FrameNode(
            id=node_id,
            name=name,
            children=_children(raw),
            bounding_box=BoundingBox.from_dict(raw.get("absoluteBoundingBox")),
            styles=_style_map(raw),
            layout_grids=tuple(
                LayoutGrid.from_dict(g) for g in raw.get("layoutGrids") or []
            ),
        )
    if node_type == "COMPONENT":
        return ComponentNode(
            id=node_id,
            name=name,
            children=_children(raw),
            bounding_box=BoundingBox.from_dict(raw.get("absoluteBoundingBox")),
            styles=_style_map(raw),
            layout_grids=tuple(
                LayoutGrid.from_dict(g) for g in raw.get("layoutGrids") or []
            ),
        )
    if node_type == "INSTANCE":
        return InstanceNode(id=node_id, name=name, children=_children(raw))
    if node_type == "RECTANGLE":
        return RectangleNode(
            id=node_id,
            name=name,
            bounding_box=BoundingBox.from_dict(raw.get("absoluteBoundingBox")),
            corner_radius=raw.get("cornerRadius") or 0,
            fills=tuple(Paint.from_dict(p) for p in raw.get("fills") or []),
            effects=tuple(Effect.from_dict(e) for e in raw.get("effects") or []),
            styles=_style_map(raw),
        )
    if node_type == "ELLIPSE":
        return EllipseNode(
            id=node_id,
            name=name,
            bounding_box=BoundingBox.from_dict(raw.get("absoluteBoundingBox")),
            fills=tuple(Paint.from_dict(p) for p in raw.get("fills") or []),
            effects=tuple(Effect.from_dict(e) for e in raw.get("effects") or []),
            styles=_style_map(raw),
        )
    if node_type == "TEXT":
        return TextNode(
            id=node_id,
            name=name,
            characters=raw.get("characters", ""),
            style=TypeStyle.from_dict(raw.get("style")),
            styles=_style_map(raw),
            bounding_box=BoundingBox.from_dict(raw.get("absoluteBoundingBox")),
        )
    return IgnoredNode(id=node_id, name=name, type=node_type, children=_children(raw))


@dataclass(frozen=True)
class FigmaFile:
    """A fetched Figma file: the document tree plus its style registry"""

    name: str
    document: DocumentNode
    styles: StyleRegistry = field(default_factory=dict)
    version: str = ""
    last_modified: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FigmaFile":
        document = parse_node(raw.get("document") or {"type": "DOCUMENT"})
        if not isinstance(document, DocumentNode):
            raise ValueError(
                f"Expected a DOCUMENT root node, got {raw.get('document', {}).get('type')!r}"
            )
        return cls(
            name=raw.get("name", ""),
            document=document,
            styles={
                style_id: StyleMeta.from_dict(meta)
                for style_id, meta in (raw.get("styles") or {}).items()
            },
            version=raw.get("version", ""),
            last_modified=raw.get("lastModified", ""),
        )


@dataclass(frozen=True)
class FileVersion:
    id: str
    created_at: str
    label: Optional[str] = None
    description: Optional[str] = None
    user: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "FileVersion":
        user = raw.get("user") or {}
        return cls(
            id=str(raw.get("id", "")),
            created_at=raw.get("created_at", ""),
            label=raw.get("label"),
            description=raw.get("description"),
            user=user.get("handle"),
        )


def canvases(document: DocumentNode) -> List[CanvasNode]:
    """Get all the page canvases from the document"""
    return [child for child in document.children if isinstance(child, CanvasNode)]
