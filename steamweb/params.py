from typing import Any, Dict, Iterable, List


def _as_string(value: Any):
	if isinstance(value, str):
		return value
	# bool is an int subclass but never a valid id
	if isinstance(value, (int, float)) and not isinstance(value, bool):
		return str(value)
	return None


def flatten_values(values: Iterable[Any]) -> List[str]:
	"""Flatten nested sequences one level and keep only string-like scalars.

	Numbers are coerced to strings, anything else is dropped. Order is kept.
	"""
	result: List[str] = []
	for value in values:
		if isinstance(value, (list, tuple, set, frozenset)):
			items = value
		else:
			items = (value,)
		for item in items:
			s = _as_string(item)
			if s is not None:
				result.append(s)
	return result


def index_params(name: str, values: Iterable[Any]) -> Dict[str, str]:
	return {f"{name}[{i}]": v for i, v in enumerate(values)}


def build_indexed_params(count_field: str, *values: Any, array_name: str = "publishedfileids") -> Dict[str, str]:
	"""Build the indexed-array form the RemoteStorage endpoints expect.

	``build_indexed_params("itemcount", "a", ["b", "c"])`` gives
	``publishedfileids[0..2]`` plus ``itemcount="3"``.
	"""
	flat = flatten_values(values)
	params = index_params(array_name, flat)
	params[count_field] = str(len(flat))
	return params
