import re
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Trade

# Store-native object id: 12 bytes rendered as 24 hex characters.
_USER_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_user_id(user_id: object) -> bool:
    """Return True if `user_id` is a well-formed 24-character hex identifier."""
    return isinstance(user_id, str) and _USER_ID_RE.match(user_id) is not None


def window_start(window_days: int, now: datetime | None = None) -> datetime:
    """Lower bound (inclusive) of a trailing window ending at `now`."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now - timedelta(days=window_days)


def fetch_trades_in_window(
    db: Session,
    user_id: str,
    window_days: int,
    now: datetime | None = None,
) -> list[Trade]:
    """
    Pull all trades of `user_id` dated on or after the start of the window.

    There is no upper bound, so same-day and future-dated trades are
    included. Trades come back in `trade_date` order (ties by id), which is
    the encounter order used by the aggregation. An empty list means the
    user simply has no trades in the window.

    `user_id` must already be validated with `is_valid_user_id`.
    """
    start = window_start(window_days, now)
    return list(
        db.scalars(
            select(Trade)
            .where(
                Trade.user_id == user_id.lower(),
                Trade.trade_date >= start,
            )
            .order_by(Trade.trade_date.asc(), Trade.id.asc())
        ).all()
    )
