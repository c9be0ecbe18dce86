import json
from typing import Any, Dict, List, Optional


class MockResponse:
	def __init__(self, payload: Any = None, status_code: int = 200, text: Optional[str] = None):
		self.status_code = status_code
		if text is not None:
			self.text = text
		elif payload is None:
			self.text = ""
		else:
			self.text = json.dumps(payload)


class DummyClient:
	"""Stands in for httpx.AsyncClient; replays queued responses in order."""

	def __init__(self, *responses: Any):
		self.responses: List[Any] = list(responses)
		self.calls: List[Dict[str, Any]] = []
		self.closed = False

	def _next(self, method: str, url: str, params=None, data=None):
		self.calls.append({"method": method, "url": url, "params": params, "data": data})
		if not self.responses:
			raise AssertionError(f"unexpected {method} {url}")
		resp = self.responses.pop(0)
		if isinstance(resp, Exception):
			raise resp
		return resp

	async def get(self, url, params=None):
		return self._next("GET", url, params=params)

	async def post(self, url, data=None):
		return self._next("POST", url, data=data)

	async def aclose(self):
		self.closed = True


