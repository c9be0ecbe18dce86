from typing import Any

import pytest

from tests.helpers import DummyClient


@pytest.fixture()
def make_api():
	from steamweb.steam_api import SteamAPI

	def _make(*responses: Any, key: str = "test-key"):
		client = DummyClient(*responses)
		api = SteamAPI(
			key=key,
			client=client,
			base_url="https://api.example.test",
			community_url="https://community.example.test",
		)
		return api, client

	return _make
