"""Error kinds raised by the Steam Web API client.

Every failed operation raises exactly one ``SteamAPIError`` subclass. Callers
that only care about the category can catch ``SteamAPIError`` and branch on
``exc.kind``.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
	TRANSPORT = "transport"
	HTTP_STATUS = "http_status"
	EMPTY_BODY = "empty_body"
	MALFORMED_PAYLOAD = "malformed_payload"
	MISSING_ENVELOPE = "missing_envelope"
	APPLICATION = "application"
	TOO_MANY_IDS = "too_many_ids"
	INVALID_APPID = "invalid_appid"


class SteamAPIError(Exception):
	kind: ErrorKind = ErrorKind.APPLICATION
	default_message: str = "request failed"

	def __init__(self, message: Optional[str] = None) -> None:
		self.message = message or self.default_message
		super().__init__(self.message)

	def __repr__(self) -> str:
		return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class TransportError(SteamAPIError):
	"""The HTTP call itself could not complete."""

	kind = ErrorKind.TRANSPORT
	default_message = "transport failure"


class HttpStatusError(SteamAPIError):
	kind = ErrorKind.HTTP_STATUS

	def __init__(self, status_code: int) -> None:
		self.status_code = status_code
		super().__init__(f"request failed, with code: {status_code}")


class EmptyBodyError(SteamAPIError):
	kind = ErrorKind.EMPTY_BODY
	default_message = "empty response body"


class MalformedPayloadError(SteamAPIError):
	kind = ErrorKind.MALFORMED_PAYLOAD
	default_message = "not JSON is returned, probably an error in API accessing"


class MissingEnvelopeError(SteamAPIError):
	kind = ErrorKind.MISSING_ENVELOPE
	default_message = "no response expected"


class ApplicationError(SteamAPIError):
	"""The API answered but its own success indicator denotes failure."""

	kind = ErrorKind.APPLICATION
	default_message = "no result"


class TooManyIdsError(SteamAPIError):
	kind = ErrorKind.TOO_MANY_IDS
	default_message = "too many steamids"


class InvalidAppIdError(SteamAPIError):
	kind = ErrorKind.INVALID_APPID
	default_message = "invalid appid"
