import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import httpx
from pydantic import ValidationError

from .config import settings
from .decode import (
	SuccessCheck,
	decode,
	extract_group_members,
	extract_vac_banned,
	indicator_ok,
	result_is_one,
	success_is_one,
	success_is_true,
)
from .errors import (
	InvalidAppIdError,
	MalformedPayloadError,
	MissingEnvelopeError,
	TooManyIdsError,
)
from .params import build_indexed_params, flatten_values, index_params
from .schemas import OwnedGames, VanityType
from .steamid import Converter, legacy_to_steam64, normalize, normalize_many
from .transport import HttpOutcome, Transport


logger = logging.getLogger(__name__)

MAX_SUMMARY_IDS = 100
GARRYS_MOD_APPID = 4000

_COMMUNITY_PREFIX_RE = re.compile(r"^https?://steamcommunity\.com/\w+/")


@dataclass(frozen=True)
class Endpoint:
	path: str
	method: str = "GET"
	envelope: Sequence[str] = ("response",)
	payload_field: Optional[str] = None
	success: SuccessCheck = indicator_ok


PUBLISHED_FILE_DETAILS = Endpoint(
	"ISteamRemoteStorage/GetPublishedFileDetails/v1/", "POST",
	payload_field="publishedfiledetails", success=result_is_one,
)
COLLECTION_DETAILS = Endpoint(
	"ISteamRemoteStorage/GetCollectionDetails/v1/", "POST",
	payload_field="collectiondetails", success=result_is_one,
)
PLAYER_SUMMARIES = Endpoint("ISteamUser/GetPlayerSummaries/v2/", payload_field="players")
PLAYER_BANS = Endpoint("ISteamUser/GetPlayerBans/v1/", envelope=(), payload_field="players")
USER_GROUP_LIST = Endpoint("ISteamUser/GetUserGroupList/v1/", payload_field="groups", success=success_is_true)
STEAM_LEVEL = Endpoint("IPlayerService/GetSteamLevel/v1/", payload_field="player_level")
RESOLVE_VANITY_URL = Endpoint("ISteamUser/ResolveVanityURL/v1/", payload_field="steamid", success=success_is_one)
FRIEND_LIST = Endpoint("ISteamUser/GetFriendList/v1/", envelope=("friendslist",), payload_field="friends")
PLAYER_ACHIEVEMENTS = Endpoint("ISteamUserStats/GetPlayerAchievements/v1/", envelope=("playerstats",))
OWNED_GAMES = Endpoint("IPlayerService/GetOwnedGames/v1/")


def clean_vanity(vanity: str) -> str:
	"""Strip a pasted community URL down to its vanity name."""
	return _COMMUNITY_PREFIX_RE.sub("", vanity.strip()).rstrip("/\\")


def coerce_appid(appid: Any) -> Union[int, float]:
	if isinstance(appid, bool):
		raise InvalidAppIdError()
	if isinstance(appid, (int, float)):
		return appid
	try:
		number = float(str(appid).strip())
	except ValueError as e:
		raise InvalidAppIdError() from e
	if math.isnan(number) or math.isinf(number):
		raise InvalidAppIdError()
	return int(number) if number.is_integer() else number


def minutes_to_hours(minutes: float) -> float:
	# half-up rounding; round() would bank 0.05 steps to even
	return math.floor(minutes / 60 * 10 + 0.5) / 10


class SteamAPI:
	"""Asynchronous facade over the Steam Web API and community XML pages.

	Every method issues at most one request and either returns the decoded
	payload or raises a ``SteamAPIError`` subclass. Nothing is retried or
	cached.

	The key travels as a query parameter, and httpx logs full request URLs at
	INFO on the ``httpx`` logger. Keep that logger at WARNING to keep the key
	out of logs.

	Example:
		async with SteamAPI(key="...") as api:
			players = await api.get_player_summaries("STEAM_0:1:70096775")
	"""

	def __init__(
		self,
		key: Optional[str] = None,
		client: Optional[httpx.AsyncClient] = None,
		base_url: Optional[str] = None,
		community_url: Optional[str] = None,
		converter: Converter = legacy_to_steam64,
	) -> None:
		self.key = key if key is not None else (settings.STEAM_API_KEY or "")
		self.base_url = (base_url or settings.STEAM_API_BASE_URL).rstrip("/")
		self.community_url = (community_url or settings.STEAM_COMMUNITY_URL).rstrip("/")
		self.converter = converter
		self.transport = Transport(client)

	async def __aenter__(self) -> "SteamAPI":
		return self

	async def __aexit__(self, *exc_info: Any) -> None:
		await self.aclose()

	async def aclose(self) -> None:
		await self.transport.aclose()

	def _url(self, endpoint: Endpoint) -> str:
		return f"{self.base_url}/{endpoint.path}"

	def _ids(self, values: Iterable[Any]) -> List[str]:
		return normalize_many(flatten_values(values), self.converter)

	async def _call(self, endpoint: Endpoint, params: Dict[str, Any]) -> Any:
		url = self._url(endpoint)
		query = {**params, "key": self.key}
		outcome: HttpOutcome
		if endpoint.method == "POST":
			outcome = await self.transport.post_form(url, query)
		else:
			outcome = await self.transport.get_with_query(url, query)
		return decode(outcome, endpoint.envelope, endpoint.payload_field, endpoint.success)

	# Workshop

	async def get_published_file_details(self, *ids: Any) -> List[Dict[str, Any]]:
		return await self._call(PUBLISHED_FILE_DETAILS, build_indexed_params("itemcount", *ids))

	async def get_collection_details(self, *ids: Any) -> List[Dict[str, Any]]:
		return await self._call(COLLECTION_DETAILS, build_indexed_params("collectioncount", *ids))

	# Players

	async def get_player_summaries(self, *ids: Any) -> List[Dict[str, Any]]:
		"""Look up at most 100 players in one request.

		Unknown ids are silently missing from the returned list.
		"""
		steamids = self._ids(ids)
		if len(steamids) > MAX_SUMMARY_IDS:
			raise TooManyIdsError(f"too many steamids: {len(steamids)} > {MAX_SUMMARY_IDS}")
		return await self._call(PLAYER_SUMMARIES, {"steamids": ",".join(steamids)})

	async def get_player_bans(self, *ids: Any) -> List[Dict[str, Any]]:
		players = await self._call(PLAYER_BANS, {"steamids": ",".join(self._ids(ids))})
		if players is None:
			raise MissingEnvelopeError("no players expected")
		return players

	async def get_steam_level(self, steamid: str) -> Optional[int]:
		return await self._call(STEAM_LEVEL, {"steamid": normalize(steamid, self.converter)})

	async def resolve_vanity_url(self, vanity: str, url_type: VanityType = VanityType.PROFILE) -> str:
		params = {"vanityurl": clean_vanity(vanity), "url_type": int(url_type)}
		return await self._call(RESOLVE_VANITY_URL, params)

	async def is_vac_banned(self, steamid: str) -> bool:
		"""Scrape the community profile XML for the VAC flag.

		This page is not part of the documented API and may change shape.
		"""
		url = f"{self.community_url}/profiles/{normalize(steamid, self.converter)}/?xml=1"
		return extract_vac_banned(await self.transport.fetch_text(url))

	async def get_friend_list(self, steamid: str, relationship: str = "friend") -> List[Dict[str, Any]]:
		params = {"steamid": normalize(steamid, self.converter), "relationship": relationship}
		friends = await self._call(FRIEND_LIST, params)
		return friends or []

	async def get_player_achievements(self, steamid: str, appid: Any) -> Dict[str, Any]:
		params = {"steamid": normalize(steamid, self.converter), "appid": appid}
		return await self._call(PLAYER_ACHIEVEMENTS, params)

	# Groups

	async def get_user_group_list(self, steamid: str) -> List[Dict[str, Any]]:
		return await self._call(USER_GROUP_LIST, {"steamid": normalize(steamid, self.converter)})

	async def get_group_members(self, group_name: str) -> List[str]:
		"""Return the Steam64 ids on the first page of a group's XML member list."""
		url = f"{self.community_url}/groups/{group_name}/memberslistxml/?xml=1"
		return extract_group_members(await self.transport.fetch_text(url))

	# Library

	async def get_owned_games(
		self,
		steamid: str,
		include_appinfo: bool = False,
		include_played_free_games: bool = False,
		appids_filter: Optional[Iterable[Any]] = None,
	) -> OwnedGames:
		params: Dict[str, Any] = {
			"steamid": normalize(steamid, self.converter),
			"include_appinfo": include_appinfo is True,
			"include_played_free_games": include_played_free_games is True,
		}
		if appids_filter is not None:
			params.update(index_params("appids_filter", flatten_values([appids_filter])))
		response = await self._call(OWNED_GAMES, params)
		try:
			return OwnedGames(count=response.get("game_count"), games=response.get("games") or [])
		except ValidationError as e:
			raise MalformedPayloadError("unexpected owned games shape") from e

	async def get_owned_game(
		self,
		steamid: str,
		appid: Any,
		include_appinfo: bool = False,
		include_played_free_games: bool = False,
	) -> Optional[Dict[str, Any]]:
		"""Find one app in the player's library; ``None`` when it is not owned."""
		appid = coerce_appid(appid)
		owned = await self.get_owned_games(steamid, include_appinfo, include_played_free_games)
		for app in owned.games:
			if app.get("appid") == appid:
				return app
		logger.debug("appid %s not in library of %s", appid, steamid)
		return None

	async def get_garrys_mod(self, steamid: str, include_appinfo: bool = False) -> Optional[Dict[str, Any]]:
		return await self.get_owned_game(steamid, GARRYS_MOD_APPID, include_appinfo)

	async def get_garrys_mod_hours(self, steamid: str) -> Optional[float]:
		game = await self.get_garrys_mod(steamid)
		if game is None:
			return None
		minutes = game.get("playtime_forever") or 0
		if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
			raise MalformedPayloadError(f"unexpected playtime_forever: {minutes!r}")
		return minutes_to_hours(minutes)
