"""
Advisory Settings for the card billing-cycle engine.

This module contains the configurable parameters of the advisory engine
and of the pending-confirmation lifecycle: the cycle catalog, the
cycle-exempt cards, the warning threshold and the confirmation TTL.

Environment variables use the ADVISORY_ prefix:
    ADVISORY_CARD_CYCLES_JSON='{"RAPPICARD": [6, 26, 0]}'
    ADVISORY_EXEMPT_CARDS='["DEBITO"]'
    ADVISORY_WARNING_THRESHOLD_DAYS=5

Usage:
    from cardwise.service.advisory.settings import advisory_settings

    ttl = advisory_settings.pending_ttl

    # Or create custom settings for testing
    custom = AdvisorySettings(warning_threshold_days=3)
"""

import json
from datetime import timedelta
from functools import lru_cache
from typing import Dict, List, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdvisorySettings(BaseSettings):
    """
    Configurable parameters for the advisory engine.

    All settings can be overridden via environment variables with ADVISORY_ prefix.
    Card identifiers are compared in upper case.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADVISORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Cycle Catalog ===
    card_cycles_json: str = Field(
        default=(
            '{"RAPPICARD": [6, 26, 0], "BBVA": [15, 5, 1], "NU": [20, 10, 1],'
            ' "SANTANDER": [28, 18, 1], "BANAMEX": [1, 21, 0]}'
        ),
        description=(
            "Billing cycles as a JSON object: "
            '{"CARD": [cut_day, due_day, due_offset], ...}; key order is catalog order'
        ),
    )
    exempt_cards: List[str] = Field(
        default_factory=lambda: ["DEBITO", "EFECTIVO"],
        description="Cards that skip cycle validation and always commit directly",
    )

    # === Advisory Policy ===
    warning_threshold_days: int = Field(
        default=5,
        ge=0,
        description="Extra days-to-pay an alternative must offer to trigger a warning",
    )
    max_alternatives: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many alternatives a warning shows",
    )

    # === Pending Confirmations ===
    pending_ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Seconds a purchase stays confirmable after its preview",
    )
    sweep_interval_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Seconds between background sweeps of expired confirmations",
    )

    @field_validator("card_cycles_json")
    @classmethod
    def validate_cycles_json(cls, v: str) -> str:
        """Validate that the cycles JSON is parseable and well-formed."""
        try:
            cycles = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")
        if not isinstance(cycles, dict):
            raise ValueError("Cycles must be a JSON object keyed by card")
        for card, cycle in cycles.items():
            if not isinstance(cycle, list) or len(cycle) != 3:
                raise ValueError(
                    f"Cycle for {card} must be [cut_day, due_day, due_offset]"
                )
            if not all(isinstance(x, int) for x in cycle):
                raise ValueError(f"Cycle values for {card} must be integers")
            cut_day, due_day, due_offset = cycle
            if not (1 <= cut_day <= 31 and 1 <= due_day <= 31):
                raise ValueError(f"Days for {card} must be between 1 and 31")
            if due_offset not in (0, 1):
                raise ValueError(f"due_offset for {card} must be 0 or 1")
        return v

    @field_validator("exempt_cards")
    @classmethod
    def normalize_exempt_cards(cls, v: List[str]) -> List[str]:
        return [card.strip().upper() for card in v if card.strip()]

    @property
    def card_cycles(self) -> Dict[str, Tuple[int, int, int]]:
        """Cycles keyed by upper-case card identifier, in configured order."""
        cycles = json.loads(self.card_cycles_json)
        return {card.strip().upper(): tuple(cycle) for card, cycle in cycles.items()}

    @property
    def pending_ttl(self) -> timedelta:
        return timedelta(seconds=self.pending_ttl_seconds)

    def is_exempt(self, card_id: str) -> bool:
        return card_id.strip().upper() in self.exempt_cards


@lru_cache
def get_advisory_settings() -> AdvisorySettings:
    """Get cached advisory settings instance."""
    return AdvisorySettings()


advisory_settings = get_advisory_settings()
