from figma2theme.figma.figma_url_parser import parse_figma_url


class TestParseFigmaUrl:
    def test_file_url(self) -> None:
        # When
        parsed = parse_figma_url("https://www.figma.com/file/abc123XYZ/Design-System")

        # Then
        assert parsed.file_key == "abc123XYZ"
        assert parsed.node_id is None
        assert parsed.version is None

    def test_design_url_with_node_id(self) -> None:
        # When
        parsed = parse_figma_url("https://www.figma.com/design/abc123/Design-System?node-id=795-156")

        # Then
        assert parsed.file_key == "abc123"
        assert parsed.node_id == "795:156"

    def test_version_id(self) -> None:
        # When
        parsed = parse_figma_url(
            "https://www.figma.com/file/abc123/Design-System?version-id=987654&node-id=0-1"
        )

        # Then
        assert parsed.version == "987654"
        assert parsed.node_id == "0:1"

    def test_encoded_and_padded_url(self) -> None:
        # When
        parsed = parse_figma_url("  https://www.figma.com/file/abc123/Design?node-id=1%3A2  ")

        # Then
        assert parsed.file_key == "abc123"
        assert parsed.node_id == "1:2"

    def test_not_a_figma_url(self) -> None:
        # When
        parsed = parse_figma_url("https://example.com/file/abc123")

        # Then
        assert parsed.file_key is None
