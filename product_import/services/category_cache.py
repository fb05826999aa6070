from typing import Dict, Optional, Tuple

DEFAULT_SEPARATOR = "/"


class CategoryPathCache:
    """
    Remembers the leaf category id of every name path resolved during one
    import run. Entries are keyed by separator and name path, since
    "Music/Rock" split on ">" is a single category. Entries are never
    evicted; create a new cache for a new run and do not share one between
    concurrent import workers.
    """

    def __init__(self):
        self._ids: Dict[Tuple[str, str], int] = {}

    def get(self, name_path: str, separator: str = DEFAULT_SEPARATOR) -> Optional[int]:
        return self._ids.get((separator, name_path))

    def store(self, name_path: str, category_id: int, separator: str = DEFAULT_SEPARATOR) -> None:
        self._ids[(separator, name_path)] = category_id

    def clear(self) -> None:
        self._ids.clear()

    def __contains__(self, key: Tuple[str, str]) -> bool:
        """`key` is a (separator, name path) pair."""
        return key in self._ids

    def __len__(self) -> int:
        return len(self._ids)
