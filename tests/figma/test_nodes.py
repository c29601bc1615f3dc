import pytest

from figma2theme.figma.nodes import (
    CanvasNode,
    ComponentNode,
    ContainerNode,
    FigmaFile,
    FrameNode,
    IgnoredNode,
    InstanceNode,
    TextNode,
    canvases,
    parse_node,
)


class TestParseNode:
    def test_frame_with_layout_grid(self) -> None:
        # Given
        raw = {
            "id": "1:1",
            "type": "FRAME",
            "name": "page/md",
            "styles": {"grid": "S:1"},
            "layoutGrids": [{"pattern": "COLUMNS", "count": 12, "gutterSize": 16, "offset": 32}],
            "children": [{"id": "1:2", "type": "VECTOR", "name": "Vector"}],
        }

        # When
        node = parse_node(raw)

        # Then
        assert isinstance(node, FrameNode)
        assert node.styles == {"grid": "S:1"}
        assert node.layout_grids[0].count == 12
        assert node.layout_grids[0].gutter_size == 16
        assert isinstance(node.children[0], IgnoredNode)
        assert node.children[0].type == "VECTOR"

    def test_text_style(self) -> None:
        # Given
        raw = {
            "id": "1:3",
            "type": "TEXT",
            "name": "font-heading",
            "characters": "Aa",
            "style": {
                "fontFamily": "Georgia",
                "fontSize": 24,
                "fontWeight": 700,
                "italic": True,
                "lineHeightPx": 32,
                "lineHeightUnit": "PIXELS",
            },
        }

        # When
        node = parse_node(raw)

        # Then
        assert isinstance(node, TextNode)
        assert node.style.font_family == "Georgia"
        assert node.style.italic is True
        assert node.style.line_height_unit == "PIXELS"
        assert node.style.text_decoration == "NONE"

    def test_missing_line_height_unit_is_left_blank(self) -> None:
        # When
        node = parse_node({"id": "1:7", "type": "TEXT", "name": "lineHeight-x", "style": {"fontSize": 16}})

        # Then
        assert node.style.line_height_unit == ""

    @pytest.mark.parametrize("node_type", ["GROUP", "SECTION", "COMPONENT_SET"])
    def test_containers_are_not_frames(self, node_type: str) -> None:
        # Given
        raw = {
            "id": "2:1",
            "type": node_type,
            "name": "Layouts",
            "children": [{"id": "2:2", "type": "FRAME", "name": "page/md"}],
        }

        # When
        node = parse_node(raw)

        # Then
        assert isinstance(node, ContainerNode)
        assert node.type == node_type
        assert isinstance(node.children[0], FrameNode)

    def test_plural_style_keys(self) -> None:
        # When
        node = parse_node({"id": "1:4", "type": "RECTANGLE", "name": "r", "styles": {"fills": "S:2"}})

        # Then
        assert node.styles["fill"] == "S:2"

    def test_component_and_instance(self) -> None:
        # When
        component = parse_node({"id": "1:5", "type": "COMPONENT", "name": "icon/custom/close"})
        instance = parse_node({"id": "1:6", "type": "INSTANCE", "name": "icon/custom/close"})

        # Then
        assert isinstance(component, ComponentNode)
        assert isinstance(instance, InstanceNode)


class TestFigmaFile:
    def test_from_dict(self) -> None:
        # Given
        raw = {
            "name": "Design System",
            "document": {
                "id": "0:0",
                "type": "DOCUMENT",
                "name": "Document",
                "children": [
                    {"id": "0:1", "type": "CANVAS", "name": "Colours"},
                    {"id": "0:2", "type": "CANVAS", "name": "Icons"},
                ],
            },
            "styles": {"S:1": {"key": "k", "name": "black", "style_type": "FILL"}},
        }

        # When
        figma_file = FigmaFile.from_dict(raw)

        # Then
        assert [c.name for c in canvases(figma_file.document)] == ["Colours", "Icons"]
        assert all(isinstance(c, CanvasNode) for c in canvases(figma_file.document))
        assert figma_file.styles["S:1"].style_type == "FILL"

    def test_root_must_be_a_document(self) -> None:
        # When / Then
        with pytest.raises(ValueError):
            FigmaFile.from_dict({"document": {"id": "0:1", "type": "CANVAS", "name": "Page"}})
