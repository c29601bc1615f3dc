from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest
import requests

from figma2theme.core.config import Settings
from figma2theme.core.exception.error_codes import ErrorCode
from figma2theme.core.exception.exceptions import ConfigurationError, FigmaApiError
from figma2theme.figma.figma_api_client import FigmaApiClient
from figma2theme.figma.nodes import CanvasNode, RectangleNode

FILE_RESPONSE = {
    "name": "Design System",
    "version": "123",
    "lastModified": "2024-01-01T00:00:00Z",
    "document": {
        "id": "0:0",
        "type": "DOCUMENT",
        "name": "Document",
        "children": [
            {
                "id": "0:1",
                "type": "CANVAS",
                "name": "Radii",
                "children": [
                    {
                        "id": "1:1",
                        "type": "RECTANGLE",
                        "name": "radii-sm",
                        "cornerRadius": 2,
                        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 10, "height": 10},
                    }
                ],
            }
        ],
    },
    "styles": {"S:1": {"key": "abc", "name": "black", "styleType": "FILL"}},
}


def mock_response(status_code: int = 200, body=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body or {}
    response.text = str(body)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return response


@pytest.fixture
def api_client() -> FigmaApiClient:
    return FigmaApiClient("test-token", base_url="https://api.figma.test/v1/")


class TestFigmaApiClient:
    def test_missing_token(self) -> None:
        # Given
        settings = Settings(_env_file=None, FIGMA_API_KEY=None)

        # When / Then
        with patch("figma2theme.figma.figma_api_client.get_setting", return_value=settings):
            with pytest.raises(ConfigurationError) as e:
                FigmaApiClient()
        assert e.value.error_code == ErrorCode.MISSING_API_KEY

    def test_get_file(self, api_client: FigmaApiClient) -> None:
        # When
        with patch(
            "figma2theme.figma.figma_api_client.requests.get",
            return_value=mock_response(body=FILE_RESPONSE),
        ) as get:
            figma_file = api_client.get_file("abc123", version="42")

        # Then
        url = get.call_args.args[0]
        assert url == "https://api.figma.test/v1/files/abc123"
        assert get.call_args.kwargs["params"] == {"version": "42"}
        assert get.call_args.kwargs["headers"]["X-Figma-Token"] == "test-token"

        assert figma_file.name == "Design System"
        canvas = figma_file.document.children[0]
        assert isinstance(canvas, CanvasNode)
        rectangle = canvas.children[0]
        assert isinstance(rectangle, RectangleNode)
        assert rectangle.corner_radius == 2
        assert figma_file.styles["S:1"].style_type == "FILL"

    @pytest.mark.parametrize(
        "status_code, error_code",
        [
            (403, ErrorCode.FIGMA_AUTH_FAILED),
            (404, ErrorCode.FIGMA_FILE_NOT_FOUND),
            (500, ErrorCode.FIGMA_REQUEST_FAILED),
        ],
    )
    def test_error_status(self, api_client: FigmaApiClient, status_code: int, error_code: ErrorCode) -> None:
        # When
        with patch(
            "figma2theme.figma.figma_api_client.requests.get",
            return_value=mock_response(status_code, {"err": "nope"}),
        ):
            with pytest.raises(FigmaApiError) as e:
                api_client.get_file("abc123")

        # Then
        assert e.value.error_code == error_code
        assert e.value.status_code == status_code
        assert e.value.suggestions

    def test_connection_error(self, api_client: FigmaApiClient) -> None:
        # When
        with patch(
            "figma2theme.figma.figma_api_client.requests.get",
            side_effect=requests.ConnectionError("offline"),
        ):
            with pytest.raises(FigmaApiError) as e:
                api_client.get_versions("abc123")

        # Then
        assert e.value.error_code == ErrorCode.FIGMA_REQUEST_FAILED
        assert e.value.status_code is None

    def test_get_versions(self, api_client: FigmaApiClient) -> None:
        # Given
        body = {
            "versions": [
                {
                    "id": 2,
                    "created_at": "2024-02-01T00:00:00Z",
                    "label": "v2",
                    "description": "New colours",
                    "user": {"handle": "designer"},
                },
                {"id": "1", "created_at": "2024-01-01T00:00:00Z"},
            ]
        }

        # When
        with patch(
            "figma2theme.figma.figma_api_client.requests.get",
            return_value=mock_response(body=body),
        ):
            versions = api_client.get_versions("abc123")

        # Then
        assert [v.id for v in versions] == ["2", "1"]
        assert versions[0].label == "v2"
        assert versions[0].user == "designer"
        assert versions[1].label is None

    def test_get_images(self, api_client: FigmaApiClient) -> None:
        # When
        with patch(
            "figma2theme.figma.figma_api_client.requests.get",
            return_value=mock_response(body={"err": None, "images": {"1:2": "https://s3/1-2.svg"}}),
        ) as get:
            images = api_client.get_images("abc123", ["1:2", "1:3"])

        # Then
        assert images == {"1:2": "https://s3/1-2.svg"}
        assert get.call_args.kwargs["params"]["ids"] == "1:2,1:3"
        assert get.call_args.kwargs["params"]["format"] == "svg"

    def test_get_images_render_error(self, api_client: FigmaApiClient) -> None:
        # When
        with patch(
            "figma2theme.figma.figma_api_client.requests.get",
            return_value=mock_response(body={"err": "Render timeout"}),
        ):
            with pytest.raises(FigmaApiError) as e:
                api_client.get_images("abc123", ["1:2"])

        # Then
        assert e.value.error_code == ErrorCode.ICON_RENDER_FAILED
        assert "Render timeout" in e.value.message


class TestDownloadSvgs:
    async def test_downloads_every_url(self, api_client: FigmaApiClient) -> None:
        # Given
        fetch = AsyncMock(side_effect=lambda session, url: f"<svg>{url}</svg>")

        # When
        with patch.object(FigmaApiClient, "_fetch_text", fetch):
            svgs = await api_client.download_svgs({"1:2": "https://s3/a", "1:3": "https://s3/b"})

        # Then
        assert svgs == {"1:2": "<svg>https://s3/a</svg>", "1:3": "<svg>https://s3/b</svg>"}
        assert fetch.await_count == 2

    async def test_download_failure(self, api_client: FigmaApiClient) -> None:
        # Given
        fetch = AsyncMock(side_effect=aiohttp.ClientError("connection reset"))

        # When
        with patch.object(FigmaApiClient, "_fetch_text", fetch):
            with pytest.raises(FigmaApiError) as e:
                await api_client.download_svgs({"1:2": "https://s3/a"})

        # Then
        assert e.value.error_code == ErrorCode.ICON_DOWNLOAD_FAILED
        assert "1:2" in e.value.message
