import json

import pytest

from steamweb.decode import (
	decode,
	extract_group_members,
	extract_vac_banned,
	indicator_ok,
	result_is_one,
	success_is_one,
	success_is_true,
)
from steamweb.errors import (
	ApplicationError,
	EmptyBodyError,
	ErrorKind,
	HttpStatusError,
	MalformedPayloadError,
	MissingEnvelopeError,
	SteamAPIError,
	TransportError,
)
from steamweb.transport import HttpOutcome


def ok(body, status=200) -> HttpOutcome:
	if not isinstance(body, str):
		body = json.dumps(body)
	return HttpOutcome(ok=True, status_code=status, body=body)


def test_transport_failure_short_circuits():
	# body would fail JSON decoding; the transport error must win
	outcome = HttpOutcome(ok=False, status_code=None, body="not json", error="connection refused")
	with pytest.raises(TransportError) as exc:
		decode(outcome)
	assert exc.value.message == "connection refused"
	assert exc.value.kind is ErrorKind.TRANSPORT


def test_status_checked_before_envelope():
	with pytest.raises(HttpStatusError) as exc:
		decode(ok({"response": {"result": 0}}, status=403))
	assert exc.value.status_code == 403
	assert "403" in str(exc.value)


@pytest.mark.parametrize("body", ["", None])
def test_empty_body(body):
	with pytest.raises(EmptyBodyError):
		decode(HttpOutcome(ok=True, status_code=200, body=body))


@pytest.mark.parametrize("body", ["<html>oops</html>", "[1, 2]", "null", "42"])
def test_malformed_payload(body):
	with pytest.raises(MalformedPayloadError):
		decode(ok(body))


def test_missing_envelope():
	with pytest.raises(MissingEnvelopeError):
		decode(ok({"something": {}}))
	with pytest.raises(MissingEnvelopeError):
		decode(ok({"response": "text"}))


def test_application_failure_despite_200():
	with pytest.raises(ApplicationError) as exc:
		decode(ok({"response": {"result": 0}}), payload_field="publishedfiledetails")
	assert exc.value.kind is ErrorKind.APPLICATION
	assert isinstance(exc.value, SteamAPIError)


def test_payload_extraction_and_absence():
	body = {"response": {"result": 1, "publishedfiledetails": [{"publishedfileid": "1"}]}}
	assert decode(ok(body), payload_field="publishedfiledetails") == [{"publishedfileid": "1"}]
	assert decode(ok({"response": {}}), payload_field="players") is None


def test_nested_and_top_level_envelopes():
	body = {"friendslist": {"friends": [{"steamid": "1"}]}}
	assert decode(ok(body), envelope=("friendslist",), payload_field="friends") == [{"steamid": "1"}]
	assert decode(ok({"players": []}), envelope=(), payload_field="players") == []
	assert decode(ok({"response": {"a": 1}})) == {"a": 1}


def test_success_predicates():
	assert indicator_ok({})
	assert indicator_ok({"result": 1, "success": True})
	assert not indicator_ok({"result": 2})
	assert not indicator_ok({"success": False})
	assert result_is_one({"result": 1})
	assert not result_is_one({})
	assert success_is_true({"success": True})
	assert not success_is_true({})
	assert success_is_one({"success": 1})
	assert not success_is_one({"success": 42})


def test_group_members_extraction():
	xml = (
		"<?xml version=\"1.0\"?><memberList><groupID64>103582791429521412</groupID64>"
		"<members><steamID64>76561197960287930</steamID64>"
		"<steamID64>76561197960265731</steamID64></members></memberList>"
	)
	assert extract_group_members(ok(xml)) == ["76561197960287930", "76561197960265731"]


def test_group_members_rejects_non_member_list():
	with pytest.raises(MalformedPayloadError):
		extract_group_members(ok("<response><error>No group could be retrieved</error></response>"))
	with pytest.raises(HttpStatusError):
		extract_group_members(ok("<memberList/>", status=500))


def test_vac_flag():
	assert extract_vac_banned(ok("<profile><vacBanned>1</vacBanned></profile>")) is True
	assert extract_vac_banned(ok("<profile><vacBanned>0</vacBanned></profile>")) is False
	with pytest.raises(MalformedPayloadError):
		extract_vac_banned(ok("<response><error>The specified profile could not be found.</error></response>"))
	with pytest.raises(TransportError):
		extract_vac_banned(HttpOutcome.failed("timeout"))
