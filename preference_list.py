# preference_list.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Optional, Tuple


def _dedup_names(names: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    out = []
    for x in names or []:
        s = str(x or "").strip()
        if not s or s in seen:
            continue
        seen.add(s)
        out.append(s)
    return tuple(out)


@dataclass(frozen=True)
class PreferenceList:
    """
    우선순위 순서의 챔피언 이름 목록 (ban 또는 pick 하나).
    cursor 자체는 ResolverState가 들고 있고, 여기서는 스캔만 제공한다.
    """
    names: Tuple[str, ...]

    @classmethod
    def of(cls, names: Iterable[str]) -> "PreferenceList":
        return cls(_dedup_names(names))

    def __len__(self) -> int:
        return len(self.names)

    def __bool__(self) -> bool:
        return bool(self.names)

    def first(self) -> Optional[str]:
        return self.names[0] if self.names else None

    def clamp(self, cursor: int) -> int:
        if cursor < 0 or cursor > len(self.names):
            return 0
        return cursor

    def scan(self, cursor: int) -> Iterator[Tuple[int, str]]:
        """(index, name) from cursor to the end of the list."""
        start = self.clamp(cursor)
        for i in range(start, len(self.names)):
            yield i, self.names[i]

    def lookup(self, name: str, champions: Mapping[str, int]) -> Optional[int]:
        cid = champions.get(name)
        if cid is None:
            return None
        try:
            cid = int(cid)
        except (TypeError, ValueError):
            return None
        return cid if cid > 0 else None
