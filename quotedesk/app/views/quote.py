"""Quote panel rendering.

Shows company name, symbol, price, colored change and logo, plus the
error prompts. Pure rendering - reads a `QuoteDisplay`, never fetches.
"""

from enum import Enum

import streamlit as st
from loguru import logger

from quotedesk.app.logic.quote_display import DisplayError, QuoteDisplay
from quotedesk.app.views.colors import trend_color
from quotedesk.app.views.common import render_empty_state


class PromptAction(str, Enum):
    """User decision taken on an error prompt."""

    DISMISS = "dismiss"
    RETRY = "retry"
    EXIT = "exit"


def render_quote_panel(display: QuoteDisplay) -> None:
    """Render the quote labels and the logo.

    Args:
        display: Current display snapshot
    """
    col_logo, col_info = st.columns([1, 3])

    with col_logo:
        render_logo(display)

    with col_info:
        st.subheader(display.company_name)
        st.caption(display.symbol)

        cols = st.columns(2)
        with cols[0]:
            st.metric(label="Price", value=display.price)
        with cols[1]:
            st.markdown("Change")
            st.markdown(
                f"<span style='font-size: 2rem; color: {trend_color(display.trend)}'>"
                f"{display.change}</span>",
                unsafe_allow_html=True,
            )


def render_logo(display: QuoteDisplay) -> None:
    """Render the company logo, or a placeholder when there is none.

    Bytes that do not decode as an image (e.g. an HTML error page served
    with status 200) show the placeholder instead of breaking the page.
    """
    if display.logo:
        try:
            st.image(display.logo, width=120)
            return
        except OSError as e:
            logger.warning(f"[{display.symbol}] Logo is not a readable image: {e}")
    render_empty_state("No logo", icon="🖼️")


def render_error_prompt(error: DisplayError, key: str) -> PromptAction | None:
    """Render an error prompt with its decision buttons.

    Fatal errors offer Retry / Exit, the others Dismiss / Retry.

    Args:
        error: Error to present
        key: Widget key prefix, unique per prompt

    Returns:
        The action the user clicked in this run, if any
    """
    st.error(f"**{error.title}**\n\n{error.message}")

    col1, col2, _ = st.columns([1, 1, 4])
    if error.fatal:
        with col1:
            if st.button("Retry", key=f"{key}_retry", type="primary"):
                return PromptAction.RETRY
        with col2:
            if st.button("Exit", key=f"{key}_exit"):
                return PromptAction.EXIT
        return None

    with col1:
        if st.button("Dismiss", key=f"{key}_dismiss"):
            return PromptAction.DISMISS
    with col2:
        if st.button("Retry", key=f"{key}_retry", type="primary"):
            return PromptAction.RETRY
    return None
