import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .config import settings


logger = logging.getLogger(__name__)


@dataclass
class HttpOutcome:
	"""Transport-level result of one request. Failures are data, not exceptions."""

	ok: bool
	status_code: Optional[int] = None
	body: Optional[str] = None
	error: Optional[str] = None

	@classmethod
	def failed(cls, error: str) -> "HttpOutcome":
		return cls(ok=False, error=error)


class Transport:
	"""Issues exactly one HTTP call per method invocation, never retrying.

	An injected ``httpx.AsyncClient`` (or anything with the same async
	``get``/``post`` surface) is used as-is and left open on ``aclose``; a
	client created here is owned and closed here.
	"""

	def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None) -> None:
		self._client = client
		self._owns_client = client is None
		self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS

	async def __aenter__(self) -> "Transport":
		return self

	async def __aexit__(self, *exc_info: Any) -> None:
		await self.aclose()

	def _get_client(self) -> httpx.AsyncClient:
		if self._client is None:
			self._client = httpx.AsyncClient(timeout=self.timeout)
			self._owns_client = True
		return self._client

	async def aclose(self) -> None:
		if self._client is not None and self._owns_client:
			await self._client.aclose()
			self._client = None

	async def post_form(self, url: str, params: Dict[str, Any]) -> HttpOutcome:
		return await self._send("POST", url, data=params)

	async def get_with_query(self, url: str, params: Dict[str, Any]) -> HttpOutcome:
		return await self._send("GET", url, params=params)

	async def fetch_text(self, url: str) -> HttpOutcome:
		return await self._send("GET", url)

	async def _send(self, method: str, url: str, **kwargs: Any) -> HttpOutcome:
		# only the url path is logged here; httpx itself logs the full url,
		# key included, at INFO on the "httpx" logger
		logger.debug("%s %s", method, url)
		client = self._get_client()
		try:
			if method == "POST":
				resp = await client.post(url, **kwargs)
			else:
				resp = await client.get(url, **kwargs)
		except (httpx.HTTPError, httpx.InvalidURL) as e:
			logger.warning("%s %s failed: %s", method, url, e)
			return HttpOutcome.failed(str(e) or type(e).__name__)
		return HttpOutcome(ok=True, status_code=resp.status_code, body=resp.text)
