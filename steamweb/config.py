import os
from typing import Optional


class Settings:
	"""Client configuration pulled from environment variables."""

	# Steam Web API
	STEAM_API_BASE_URL: str = os.getenv(
		"STEAM_API_BASE_URL", "https://api.steampowered.com"
	)
	STEAM_API_KEY: Optional[str] = os.getenv("STEAM_API_KEY")

	# Community site (XML profile and group pages)
	STEAM_COMMUNITY_URL: str = os.getenv(
		"STEAM_COMMUNITY_URL", "https://steamcommunity.com"
	)

	# Transport behavior
	REQUEST_TIMEOUT_SECONDS: int = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "20"))


settings = Settings()
