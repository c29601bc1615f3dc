"""
Figma REST API Client
Fetches files, versions and rendered images from the Figma API
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
import requests

from figma2theme.core.config import get_setting
from figma2theme.core.exception.error_codes import ErrorCode
from figma2theme.core.exception.exceptions import ConfigurationError, FigmaApiError
from figma2theme.figma.nodes import FigmaFile, FileVersion

logger = logging.getLogger(__name__)

CREDENTIALS_SUGGESTION = (
    "- Please double check the values of your FIGMA_API_KEY and FIGMA_FILE_URL environment variables."
)


class FigmaApiClient:
    """Figma REST API client"""

    def __init__(
        self,
        api_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        download_timeout: Optional[int] = None,
        worker_count: Optional[int] = None,
    ):
        settings = get_setting()
        self.api_token = api_token or settings.FIGMA_API_KEY
        if not self.api_token:
            raise ConfigurationError(
                ErrorCode.MISSING_API_KEY,
                "Figma API token is required.",
                suggestions=[
                    "- Set the FIGMA_API_KEY environment variable or pass the token directly."
                ],
            )
        self.base_url = (base_url or settings.FIGMA_API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.FIGMA_API_TIMEOUT
        self.download_timeout = download_timeout or settings.FIGMA_DOWNLOAD_TIMEOUT
        self.worker_count = max(1, worker_count or settings.FIGMA_WORKER_COUNT)
        self.headers = {
            "X-Figma-Token": self.api_token,
            "Content-Type": "application/json",
        }

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(
                url, headers=self.headers, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.debug(f"Request to {url} failed: {e}")
            raise FigmaApiError(
                ErrorCode.FIGMA_REQUEST_FAILED,
                "There was an error connecting to the Figma API.",
                suggestions=["- Please check your network connection.", CREDENTIALS_SUGGESTION],
            ) from e

        if response.status_code == 403:
            raise FigmaApiError(
                ErrorCode.FIGMA_AUTH_FAILED,
                "The Figma API rejected the API key.",
                suggestions=[CREDENTIALS_SUGGESTION],
                status_code=403,
            )
        if response.status_code == 404:
            raise FigmaApiError(
                ErrorCode.FIGMA_FILE_NOT_FOUND,
                "The Figma file could not be found.",
                suggestions=[CREDENTIALS_SUGGESTION],
                status_code=404,
            )
        try:
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.debug(f"Figma API error response: {response.text}")
            raise FigmaApiError(
                ErrorCode.FIGMA_REQUEST_FAILED,
                "There was an error loading the Figma file.",
                suggestions=[CREDENTIALS_SUGGESTION],
                status_code=response.status_code,
            ) from e

    def get_file(self, file_key: str, version: Optional[str] = None) -> FigmaFile:
        """
        Fetch a Figma file

        Args:
            file_key: Figma file key
            version: Optional version ID to pin the file to

        Returns:
            The parsed Figma file
        """
        params = {"version": version} if version else None
        logger.debug(f"Fetching Figma file {file_key} (version: {version or 'latest'})")
        data = self._get_json(f"/files/{file_key}", params=params)
        try:
            return FigmaFile.from_dict(data)
        except ValueError as e:
            raise FigmaApiError(
                ErrorCode.FIGMA_REQUEST_FAILED,
                f"The Figma API returned an unexpected document: {e}",
            ) from e

    def get_versions(self, file_key: str) -> List[FileVersion]:
        """Fetch the version history of a Figma file, newest first"""
        data = self._get_json(f"/files/{file_key}/versions")
        return [FileVersion.from_dict(v) for v in data.get("versions", [])]

    def get_images(
        self,
        file_key: str,
        node_ids: List[str],
        format: str = "svg",
        scale: float = 1.0,
    ) -> Dict[str, Optional[str]]:
        """
        Render nodes as images in a single batched request

        Args:
            file_key: Figma file key
            node_ids: IDs of the nodes to render
            format: Image format (svg, png, jpg, pdf)
            scale: Image scale

        Returns:
            Node ID -> image URL (None where Figma failed to render the node)
        """
        params = {"ids": ",".join(node_ids), "format": format, "scale": scale}
        logger.debug(f"Rendering {len(node_ids)} nodes as {format}")
        data = self._get_json(f"/images/{file_key}", params=params)
        if data.get("err"):
            raise FigmaApiError(
                ErrorCode.ICON_RENDER_FAILED,
                f"Figma failed to render the icons: {data['err']}",
            )
        return data.get("images") or {}

    async def _fetch_text(self, session: aiohttp.ClientSession, url: str) -> str:
        async with session.get(url) as response:
            response.raise_for_status()
            return await response.text()

    async def download_svgs(self, urls: Dict[str, str]) -> Dict[str, str]:
        """
        Download rendered SVG images concurrently

        Args:
            urls: Node ID -> image URL

        Returns:
            Node ID -> SVG markup
        """
        semaphore = asyncio.Semaphore(self.worker_count)
        timeout = aiohttp.ClientTimeout(total=self.download_timeout)

        async with aiohttp.ClientSession(timeout=timeout) as session:

            async def download(node_id: str, url: str) -> str:
                async with semaphore:
                    try:
                        return await self._fetch_text(session, url)
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        raise FigmaApiError(
                            ErrorCode.ICON_DOWNLOAD_FAILED,
                            f"Failed to download the SVG for node {node_id}: {e}",
                            suggestions=["- Please check your network connection."],
                        ) from e

            node_ids = list(urls)
            results = await asyncio.gather(
                *(download(node_id, urls[node_id]) for node_id in node_ids)
            )

        return dict(zip(node_ids, results))
