"""Card advisory service - read-only payment window and ranking queries."""

from datetime import date
from typing import Iterable, Optional

import structlog

from cardwise.core.clock import Clock
from cardwise.domain.exceptions import CardNotConfiguredException
from cardwise.application.dto import (
    CardWindowResponse,
    PaymentWindowDTO,
    RankingResponse,
)
from cardwise.service.advisory import (
    AdvisorySettings,
    CycleCatalog,
    advisory_settings,
    compute_window,
    normalize_card_id,
    rank_cards,
)

logger = structlog.get_logger(__name__)


class CardAdvisoryService:
    """
    Application service for card advisory queries.

    Dates default to today in the service's timezone.
    """

    def __init__(
        self,
        catalog: CycleCatalog,
        clock: Clock,
        settings: AdvisorySettings = advisory_settings,
    ):
        self._catalog = catalog
        self._clock = clock
        self._settings = settings

    def get_window(self, card_id: str, on: Optional[date] = None) -> CardWindowResponse:
        """
        Payment window of one card.

        Raises:
            CardNotConfiguredException: If the card has no billing cycle
        """
        card = normalize_card_id(card_id)
        reference = on or self._clock().date()

        window = compute_window(card, reference, self._catalog)
        if window is None:
            logger.warning("card_not_configured", card_id=card)
            raise CardNotConfiguredException(card)

        return CardWindowResponse(
            card_id=card,
            exempt=self._settings.is_exempt(card),
            window=PaymentWindowDTO.from_entity(window),
        )

    def get_ranking(
        self,
        on: Optional[date] = None,
        exclude: Iterable[str] = (),
    ) -> RankingResponse:
        """Every catalog card ordered by days to pay, longest first."""
        reference = on or self._clock().date()
        ranking = rank_cards(reference, self._catalog, excluded=exclude)

        logger.info(
            "ranking_computed",
            reference_date=reference.isoformat(),
            count=len(ranking),
            best_card=ranking[0].card_id if ranking else None,
        )

        return RankingResponse.from_entities(reference, ranking)
