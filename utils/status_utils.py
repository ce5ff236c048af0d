"""
Status Classification

Maps an application's status text onto the fixed set of buckets used for all
aggregate counts: not_yet_applied, application_started, interview, offer,
rejection and pending.

Matching is case-insensitive substring matching against StatusKeywords, not
enum equality, so free-form legacy text ("2nd round interview",
"Offer received!") still classifies. Each record lands in exactly one bucket:
when its text matches several, StatusKeywords.PRECEDENCE decides and the
record is also counted as overlapping, with a data-quality warning logged.
"""

import logging
from typing import Iterable, List, Optional

from constants import Messages, StatusKeywords
from models.metrics_models import StatusCounts

logger = logging.getLogger(__name__)

PENDING = "pending"
BUCKETS = tuple(name for name, _ in StatusKeywords.PRECEDENCE)


def matching_buckets(status_text: Optional[str]) -> List[str]:
    """Return every bucket whose keywords occur in `status_text`, in precedence order."""
    if not status_text:
        return []
    text = str(status_text).lower()
    return [
        name for name, keywords in StatusKeywords.PRECEDENCE
        if any(keyword in text for keyword in keywords)
    ]


def classify_status(status_text: Optional[str]) -> str:
    """Return the single bucket for `status_text`; unmatched text is pending."""
    buckets = matching_buckets(status_text)
    return buckets[0] if buckets else PENDING


def count_statuses(records: Iterable) -> StatusCounts:
    """
    Count records per bucket.

    Records only need an `application_status` attribute. The bucket counts plus
    pending always sum to the number of records.
    """
    counts = StatusCounts()
    for record in records:
        counts.total += 1
        status_text = getattr(record, "application_status", None)
        buckets = matching_buckets(status_text)
        if not buckets:
            continue
        if len(buckets) > 1:
            counts.overlapping += 1
            logger.warning(Messages.STATUS_OVERLAP.format(
                status=status_text, buckets=buckets, chosen=buckets[0]))
        chosen = buckets[0]
        setattr(counts, chosen, getattr(counts, chosen) + 1)

    classified = sum(getattr(counts, name) for name in BUCKETS)
    counts.pending = max(0, counts.total - classified)
    return counts
