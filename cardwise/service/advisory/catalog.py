"""
Cycle Catalog.

Immutable mapping from card identifier to its billing cycle. The
catalog is built once from settings and injected wherever a cycle is
needed; iteration order is the configured order and doubles as the
ranking tie-break.
"""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from cardwise.domain.entities import CycleConfig

from .settings import AdvisorySettings, advisory_settings


def normalize_card_id(card_id: str) -> str:
    return card_id.strip().upper()


class CycleCatalog:
    """Read-only card -> CycleConfig mapping."""

    def __init__(self, cycles: Mapping[str, CycleConfig]):
        self._cycles: Mapping[str, CycleConfig] = MappingProxyType(
            {normalize_card_id(card): cycle for card, cycle in cycles.items()}
        )

    @classmethod
    def from_settings(cls, settings: AdvisorySettings = advisory_settings) -> "CycleCatalog":
        return cls.from_tuples(settings.card_cycles)

    @classmethod
    def from_tuples(cls, cycles: Dict[str, Tuple[int, int, int]]) -> "CycleCatalog":
        return cls(
            {
                card: CycleConfig(cut_day=cut, due_day=due, due_offset=offset)
                for card, (cut, due, offset) in cycles.items()
            }
        )

    def get(self, card_id: str) -> Optional[CycleConfig]:
        return self._cycles.get(normalize_card_id(card_id))

    def __contains__(self, card_id: object) -> bool:
        return isinstance(card_id, str) and normalize_card_id(card_id) in self._cycles

    def __iter__(self) -> Iterator[str]:
        return iter(self._cycles)

    def __len__(self) -> int:
        return len(self._cycles)

    def items(self):
        return self._cycles.items()
