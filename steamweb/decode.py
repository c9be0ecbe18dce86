"""Validation and decoding of raw HTTP outcomes.

Checks run in a fixed order and stop at the first failure: transport,
status code, body presence, JSON shape, envelope, then the API's own
success indicator.
"""
import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from .errors import (
	ApplicationError,
	EmptyBodyError,
	HttpStatusError,
	MalformedPayloadError,
	MissingEnvelopeError,
	TransportError,
)
from .transport import HttpOutcome


logger = logging.getLogger(__name__)

SuccessCheck = Callable[[Dict[str, Any]], bool]

_STEAMID64_RE = re.compile(r"<steamID64>(\d+)</steamID64>")
_VAC_BANNED = "<vacBanned>1</vacBanned>"


def indicator_ok(envelope: Dict[str, Any]) -> bool:
	"""Fail only when an explicit ``result`` or ``success`` field says so."""
	if "result" in envelope and envelope["result"] != 1:
		return False
	if "success" in envelope and not envelope["success"]:
		return False
	return True


def result_is_one(envelope: Dict[str, Any]) -> bool:
	return envelope.get("result") == 1


def success_is_true(envelope: Dict[str, Any]) -> bool:
	return bool(envelope.get("success"))


def success_is_one(envelope: Dict[str, Any]) -> bool:
	# ResolveVanityURL answers success=42 when nothing matched
	return envelope.get("success") == 1


def check_outcome(outcome: HttpOutcome) -> str:
	"""Return the response body, or raise for transport/status/empty-body failures."""
	if not outcome.ok:
		raise TransportError(outcome.error)
	if outcome.status_code != 200:
		raise HttpStatusError(outcome.status_code)
	if not outcome.body:
		raise EmptyBodyError()
	return outcome.body


def parse_json_object(body: str) -> Dict[str, Any]:
	try:
		data = json.loads(body)
	except ValueError as e:
		raise MalformedPayloadError() from e
	if not isinstance(data, dict):
		raise MalformedPayloadError()
	return data


def decode(
	outcome: HttpOutcome,
	envelope: Sequence[str] = ("response",),
	payload_field: Optional[str] = None,
	success: SuccessCheck = indicator_ok,
) -> Any:
	body = check_outcome(outcome)
	node = parse_json_object(body)
	for key in envelope:
		child = node.get(key)
		if not isinstance(child, dict):
			raise MissingEnvelopeError(f"no {key} expected")
		node = child
	if not success(node):
		logger.warning("API reported failure: %s", node)
		raise ApplicationError()
	if payload_field is None:
		return node
	return node.get(payload_field)


def extract_group_members(outcome: HttpOutcome) -> List[str]:
	body = check_outcome(outcome)
	if "<memberList" not in body:
		raise MalformedPayloadError("not a group member list")
	return _STEAMID64_RE.findall(body)


def extract_vac_banned(outcome: HttpOutcome) -> bool:
	body = check_outcome(outcome)
	if "<profile" not in body:
		raise MalformedPayloadError("not a profile document")
	return _VAC_BANNED in body
