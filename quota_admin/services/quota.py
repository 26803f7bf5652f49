from quota_admin.core.config import get_settings


def render_number(num: int) -> str:
    if num >= 1_000_000_000:
        return f"{num / 1_000_000_000:.1f}B"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 10_000:
        return f"{num / 1_000:.1f}k"
    return str(num)


def render_quota(quota: int, digits: int | None = None) -> str:
    """Human-readable quota label, e.g. ``500000`` -> ``"$1.00"``."""
    settings = get_settings()
    if not settings.display_in_currency:
        return render_number(quota)
    if digits is None:
        digits = settings.quota_display_digits
    return f"${quota / settings.quota_per_unit:.{digits}f}"
