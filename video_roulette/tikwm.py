from typing import Any, List, Optional

import requests
from pydantic import ValidationError as ModelValidationError

from .data_models import VideoInfo
from .errors import DecodeError, RemoteAPIError, TransportError
from .settings import logger, DEBUG_LOGGING, TIKWM_API_URL, TIKWM_TIMEOUT

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class TikwmClient:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        api_url: str = TIKWM_API_URL,
        timeout: float = TIKWM_TIMEOUT,
    ):
        self.session = session or requests.Session()
        self.api_url = api_url
        self.timeout = timeout

    def _get_json(self, url: str, what: str, params: Optional[dict] = None) -> Any:
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {str(e)}")
            raise TransportError(f"error fetching {what}: {e}") from e

        logger.debug(f"{url} answered {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Response from {url} is not JSON (status {response.status_code})")
            raise DecodeError(f"error decoding {what}: {e}") from e

    def fetch(self, video_url: str) -> VideoInfo:
        """
        Look up a single video on tikwm.

        Args:
            video_url: The page URL of the video, sent percent-encoded as the `url` parameter

        Returns:
            The decoded response, guaranteed to carry `data`
        """
        logger.info(f"Fetching video info for URL: {video_url}")
        payload = self._get_json(self.api_url, "video info", params={"url": video_url})

        try:
            info = VideoInfo.model_validate(payload)
        except ModelValidationError as e:
            logger.error(f"Unexpected video info shape: {str(e)}")
            raise DecodeError(f"error decoding video info: {e}") from e

        if info.code != 0:
            logger.error(f"tikwm returned code {info.code}: {info.msg}")
            raise RemoteAPIError(info.code, info.msg)

        if info.data is None:
            raise DecodeError("error decoding video info: response has no data")

        if DEBUG_LOGGING:
            logger.debug(f"  id: {info.data.id}")
            logger.debug(f"  title: {info.data.title}")
            logger.debug(f"  duration: {info.data.duration}s")

        return info

    def fetch_url_list(self, list_url: str) -> List[str]:
        """
        Download a list of video URLs for bulk import.

        Accepts a JSON array of strings or of {"url": ...} objects, optionally
        wrapped in {"urls": [...]}. Blank entries are dropped.
        """
        logger.info(f"Fetching URL list from {list_url}")
        payload = self._get_json(list_url, "URL list")

        if isinstance(payload, dict):
            payload = payload.get("urls")
        if not isinstance(payload, list):
            raise DecodeError("error decoding URL list: expected a JSON array")

        urls = []
        for entry in payload:
            if isinstance(entry, dict):
                entry = entry.get("url")
            if not isinstance(entry, str):
                raise DecodeError(f"error decoding URL list: unexpected entry {entry!r}")
            if entry.strip():
                urls.append(entry.strip())

        logger.info(f"URL list contains {len(urls)} entries")
        return urls
