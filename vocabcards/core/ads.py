"""Decide where the advertisement slot appears between cards."""

AD_INTERVAL = 5


def should_show_ad(cursor: int) -> bool:
    """True for every fifth card position, never for the first card."""
    return cursor > 0 and cursor % AD_INTERVAL == 0


def ad_slot_id(group: int, cursor: int) -> str:
    """Unique id for the ad placeholder at a card position."""
    return f"ad-g{group}-c{cursor}"
