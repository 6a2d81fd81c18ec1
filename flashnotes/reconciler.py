"""
Aligns a question's expanded card variants with its persisted schedule records.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .models import Card, CardFrontBack
from .schedule import CardScheduleInfo

logger = logging.getLogger(__name__)


@dataclass
class CardReconciliation:
    """Outcome of aligning variants with schedule records for one question."""

    cards: List[Card]
    has_changed: bool = False
    dropped_schedules: List[CardScheduleInfo] = field(default_factory=list)


def reconcile_cards(
    variants: Sequence[CardFrontBack],
    schedules: Sequence[CardScheduleInfo],
) -> CardReconciliation:
    """
    Build one card per content variant and attach schedule state by position.

    The variants are authoritative for how many cards exist. Extra schedule
    records (left behind when an edit removed cards) are dropped from the
    end and reported through ``has_changed``; fewer records than variants
    just means some cards are new. Card ``i`` receives ``schedules[i]``
    unless that record is missing or a dummy placeholder.

    Alignment is purely positional: reordering the variants of a question
    reassigns its review history.

    Parameters:
        variants (Sequence[CardFrontBack]): Content variants in expansion order.
        schedules (Sequence[CardScheduleInfo]): Records parsed from the question text, in annotation order.

    Returns:
        CardReconciliation: The cards (``len(variants)`` of them), whether stale records were dropped, and the dropped records.
    """
    correct_length = len(variants)
    kept = list(schedules[:correct_length])
    dropped = list(schedules[correct_length:])
    if dropped:
        logger.info(
            "Dropping %s stale schedule record(s): %s cards but %s records.",
            len(dropped),
            correct_length,
            len(schedules),
        )

    cards: List[Card] = []
    for idx, variant in enumerate(variants):
        schedule = kept[idx] if idx < len(kept) else None
        if schedule is not None and schedule.is_dummy_schedule_for_new_card():
            schedule = None
        cards.append(
            Card(
                front=variant.front,
                back=variant.back,
                card_idx=idx,
                schedule_info=schedule,
            )
        )

    return CardReconciliation(
        cards=cards,
        has_changed=bool(dropped),
        dropped_schedules=dropped,
    )
