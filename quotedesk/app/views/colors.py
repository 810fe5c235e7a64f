# Define a static color class for consistent use across the app

from quotedesk.core.domain_models import ChangeTrend


class Colors:
    # Semantic: Success / Growth (Emerald instead of "Grass Green")
    green = "#059669"  # Emerald 600 (Money color, good readability)

    # Semantic: Danger / Loss (Rose/Red instead of "Warning Sign Red")
    red = "#dc2626"  # Red 600 (Clear, but not glaring)

    # Neutral text
    black = "#111827"


# Change label color per price trend. Zero change keeps the default text color.
TREND_COLOR_MAP = {
    ChangeTrend.POSITIVE: Colors.green,
    ChangeTrend.NEGATIVE: Colors.red,
    ChangeTrend.NEUTRAL: Colors.black,
}


def trend_color(trend: ChangeTrend) -> str:
    return TREND_COLOR_MAP[trend]
