from enum import IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class VanityType(IntEnum):
	PROFILE = 1
	GROUP = 2
	OFFICIAL_GAME_GROUP = 3


class OwnedGames(BaseModel):
	"""Owned-games payload reshaped from ``game_count``/``games``."""

	count: Optional[int] = Field(None, alias="game_count")
	games: List[Dict[str, Any]] = Field(default_factory=list)

	model_config = ConfigDict(populate_by_name=True)
