"""Filter stages of the game filter pipeline.

Every stage takes the items produced by the previous stage plus the request
criteria and returns a lazy, possibly shorter iterable. Stages never mutate
their input and never raise on odd criteria: a missing or malformed value
turns the stage into a pass-through.
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from gamestore.models.catalog import CatalogItem
from gamestore.models.filters import FilterCriteria, PublishDateOption

logger = logging.getLogger(__name__)

MIN_CUTOFF = datetime.min.replace(tzinfo=UTC)


def filter_by_genres(
    items: Iterable[CatalogItem], criteria: FilterCriteria
) -> Iterable[CatalogItem]:
    """Keep items sharing at least one genre with the criteria."""
    if not criteria.genre_ids:
        return items
    logger.debug("Applying genre filter with %d genre ids", len(criteria.genre_ids))
    return (item for item in items if not item.genre_ids.isdisjoint(criteria.genre_ids))


def filter_by_platforms(
    items: Iterable[CatalogItem], criteria: FilterCriteria
) -> Iterable[CatalogItem]:
    """Keep items available on at least one of the requested platforms."""
    if not criteria.platform_ids:
        return items
    logger.debug(
        "Applying platform filter with %d platform ids", len(criteria.platform_ids)
    )
    return (
        item for item in items if not item.platform_ids.isdisjoint(criteria.platform_ids)
    )


def filter_by_publishers(
    items: Iterable[CatalogItem], criteria: FilterCriteria
) -> Iterable[CatalogItem]:
    """Keep items whose publisher is one of the requested publishers."""
    if not criteria.publisher_ids:
        return items
    logger.debug(
        "Applying publisher filter with %d publisher ids", len(criteria.publisher_ids)
    )
    return (
        item
        for item in items
        if item.publisher_id is not None and item.publisher_id in criteria.publisher_ids
    )


def filter_by_price(
    items: Iterable[CatalogItem], criteria: FilterCriteria
) -> Iterable[CatalogItem]:
    """Apply the optional inclusive price bounds independently."""
    minimum, maximum = criteria.min_price, criteria.max_price
    if minimum is None and maximum is None:
        return items
    logger.debug("Filtering games with price in [%s, %s]", minimum, maximum)
    return (
        item
        for item in items
        if (minimum is None or item.price >= minimum)
        and (maximum is None or item.price <= maximum)
    )


def filter_by_name(
    items: Iterable[CatalogItem], criteria: FilterCriteria
) -> Iterable[CatalogItem]:
    """Keep items whose lower-cased name contains the lower-cased query."""
    if not criteria.name:
        return items
    logger.debug("Filtering games by name containing '%s'", criteria.name)
    needle = criteria.name.lower()
    return (item for item in items if needle in item.name.lower())


def filter_by_publish_date(
    items: Iterable[CatalogItem],
    criteria: FilterCriteria,
    now: datetime | None = None,
) -> Iterable[CatalogItem]:
    """Keep items created on or after the cutoff of the requested window."""
    cutoff = resolve_publish_date_cutoff(criteria.publish_date, now)
    if cutoff == MIN_CUTOFF:
        return items
    logger.debug("Filtering games created after %s", cutoff.isoformat())
    return (item for item in items if item.created_at >= cutoff)


def resolve_publish_date_cutoff(bucket: str | None, now: datetime | None = None) -> datetime:
    """Translate a publish-date bucket name into an absolute cutoff instant.

    Unknown or absent buckets resolve to :data:`MIN_CUTOFF`, which keeps
    everything.
    """
    if not bucket:
        return MIN_CUTOFF
    try:
        option = PublishDateOption(bucket.strip().lower())
    except ValueError:
        logger.debug("Ignoring unknown publish date bucket '%s'", bucket)
        return MIN_CUTOFF

    reference = now or datetime.now(UTC)
    if option is PublishDateOption.LAST_WEEK:
        return reference - timedelta(days=7)
    if option is PublishDateOption.LAST_MONTH:
        return _shift_months(reference, -1)
    if option is PublishDateOption.LAST_YEAR:
        return _shift_months(reference, -12)
    if option is PublishDateOption.TWO_YEARS:
        return _shift_months(reference, -24)
    return _shift_months(reference, -36)


def _shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` by whole calendar months, clamping the day of month."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
