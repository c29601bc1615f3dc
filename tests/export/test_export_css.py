from figma2theme.export.export_css import css_variables, export_css, shadows_to_css
from figma2theme.export.export_utility_classes import export_utility_classes, utility_classes
from figma2theme.export.templating import ExportContext
from figma2theme.tokens.types import TokenDictionary


class TestCssVariables:
    def test_variables(self, tokens: TokenDictionary) -> None:
        # When
        variables = dict(css_variables(tokens))

        # Then
        assert variables["breakpoints-sm"] == "30em"
        assert variables["colours-custom-grey-500"] == "#5e5858"
        assert variables["shadows-md"] == "0px 4px 8px 0px #00000040"
        assert variables["grid-styles-page-columns-base"] == "4"
        assert variables["grid-styles-page-columns-md"] == "12"
        assert variables["grid-styles-page-gutter"] == "1rem"
        assert variables["typography-font-sizes-md"] == "1rem"
        assert not any(name.startswith(("icons", "text-styles")) for name in variables)

    def test_shadows_to_css(self) -> None:
        # Given
        shadows = [
            {"inset": True, "color": "#000000", "offsetX": "0px", "offsetY": "1px", "blur": "2px", "spread": "0px"},
            {"inset": False, "color": "#1a334d4d", "offsetX": "0px", "offsetY": "4px", "blur": "8px", "spread": "0px"},
        ]

        # When / Then
        assert shadows_to_css(shadows) == "inset 0px 1px 2px 0px #000000, 0px 4px 8px 0px #1a334d4d"


class TestExportCss:
    def test_writes_tokens_css(self, tokens: TokenDictionary, tmp_path) -> None:
        # Given
        context = ExportContext(tool_version="1.0.0", figma_file_key="abc123", version_description="v2")

        # When
        path = export_css(tokens, tmp_path, context)

        # Then
        contents = path.read_text(encoding="utf-8")
        assert path.name == "tokens.css"
        assert "Generated by figma2theme v1.0.0" in contents
        assert "Figma file: abc123 (v2)" in contents
        assert ":root {\n" in contents
        assert "  --radii-sm: 0.125rem;\n" in contents
        assert "  --typography-fonts-heading: Georgia;\n" in contents

    def test_without_context_has_no_header(self, tokens: TokenDictionary, tmp_path) -> None:
        # When
        contents = export_css(tokens, tmp_path).read_text(encoding="utf-8")

        # Then
        assert contents.startswith(":root {")


class TestUtilityClasses:
    def test_margin_utilities_for_every_spacing_token(self, tokens: TokenDictionary) -> None:
        # When
        classes = utility_classes(tokens)

        # Then
        assert len(classes) == 7 * 2
        assert classes[0].class_name == "margin-1"
        assert classes[0].variable == "spacing-1"
        assert {c.css_property for c in classes} == {
            "margin",
            "margin-block",
            "margin-inline",
            "margin-block-start",
            "margin-inline-end",
            "margin-block-end",
            "margin-inline-start",
        }

    def test_writes_utilities_css(self, tokens: TokenDictionary, tmp_path) -> None:
        # When
        path = export_utility_classes(tokens, tmp_path)

        # Then
        contents = path.read_text(encoding="utf-8")
        assert path.name == "utilities.css"
        assert ".margin-block-2 {\n  margin-block: var(--spacing-2);\n}\n" in contents
