import re
from typing import Callable, Iterable, List

# Account id offset for individual accounts in the public universe
STEAMID64_BASE = 76561197960265728

_LEGACY_RE = re.compile(r"STEAM_(\d+):(\d+):(\d+)")

Converter = Callable[[str], str]


def is_legacy_steam_id(value: str) -> bool:
	return isinstance(value, str) and _LEGACY_RE.fullmatch(value) is not None


def legacy_to_steam64(value: str) -> str:
	"""Convert ``STEAM_X:Y:Z`` to the 64-bit decimal form.

	The universe digit ``X`` is ignored; Steam64 ids are always issued in the
	public universe.
	"""
	m = _LEGACY_RE.fullmatch(value)
	if not m:
		raise ValueError(f"not a legacy SteamID: {value!r}")
	auth_server = int(m.group(2))
	account = int(m.group(3))
	return str(STEAMID64_BASE + account * 2 + auth_server)


def normalize(value: str, converter: Converter = legacy_to_steam64) -> str:
	"""Return the canonical id for ``value``; non-legacy input passes through."""
	if is_legacy_steam_id(value):
		return converter(value)
	return value


def normalize_many(values: Iterable[str], converter: Converter = legacy_to_steam64) -> List[str]:
	return [normalize(v, converter) for v in values]
