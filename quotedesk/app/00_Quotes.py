"""Quote Desk Dashboard - Main Entry Point.

Pick a company in the sidebar to see its latest quote and logo.
The company list is loaded once per session; a quote is fetched whenever
the selection changes or the user asks for a retry.
"""

import asyncio

import streamlit as st
from loguru import logger

from quotedesk.app.logic.controller import QuoteController
from quotedesk.app.logic.dispatch import UiDispatcher
from quotedesk.app.logic.quote_display import DisplayError, QuoteDisplay
from quotedesk.app.logic.services import open_services
from quotedesk.app.views.common import company_selection, render_sidebar_header
from quotedesk.app.views.quote import PromptAction, render_error_prompt, render_quote_panel
from quotedesk.config.settings import load_config
from quotedesk.core.config import configure_logging, get_settings
from quotedesk.core.domain_models import CompanyDirectory

settings = get_settings()
configure_logging(settings.log_level)
config = load_config()

st.set_page_config(
    page_title=config.ui.page_title,
    page_icon=config.ui.page_icon,
    layout="wide",
    initial_sidebar_state="expanded",
)

# Header
st.title(f"{config.ui.page_icon} {config.ui.page_title}")
st.divider()
render_sidebar_header("Companies", "Most active companies on IEX Cloud")

state = st.session_state

if state.get("exited"):
    st.info("Session ended. Reload the page to start again.")
    st.stop()


def _controller(services, directory: CompanyDirectory | None = None, on_update=None):
    return QuoteController(
        services.directory_loader,
        services.fetcher,
        UiDispatcher(),
        cancel_stale_requests=settings.cancel_stale_requests,
        on_update=on_update,
        directory=directory,
    )


async def _load_directory() -> tuple[CompanyDirectory | None, DisplayError | None]:
    async with open_services(settings, config) as services:
        controller = _controller(services)
        await controller.load_directory()
        return controller.directory, controller.fatal_error


async def _refresh(directory: CompanyDirectory, index: int, on_update) -> QuoteDisplay:
    async with open_services(settings, config) as services:
        controller = _controller(services, directory=directory, on_update=on_update)
        controller.select(index)
        await controller.wait()
        return controller.display


# --- Company directory (once per session) ---

# Loads only on the first run and after an explicit Retry; reruns caused by
# the prompt's buttons must not reach the API.
if state.get("directory") is None:
    if state.get("load_directory", True):
        state["load_directory"] = False
        with st.spinner("Loading companies..."):
            state["directory"], state["fatal_error"] = asyncio.run(_load_directory())

    fatal_error: DisplayError | None = state.get("fatal_error")
    if fatal_error is not None:
        action = render_error_prompt(fatal_error, key="directory_error")
        if action == PromptAction.RETRY:
            state["load_directory"] = True
            st.rerun()
        elif action == PromptAction.EXIT:
            logger.info("User ended the session after directory load failure")
            state["exited"] = True
            st.rerun()
        st.stop()

directory = state["directory"]
selected_index = company_selection(directory)

# --- Quote panel ---

panel = st.empty()


def paint(display: QuoteDisplay) -> None:
    with panel.container():
        if display.busy:
            st.info("⏳ Loading quote...")
        render_quote_panel(display)


needs_refresh = state.get("display_index") != selected_index or state.pop("retry", False)
if needs_refresh:
    state["display"] = asyncio.run(_refresh(directory, selected_index, paint))
    state["display_index"] = selected_index

display: QuoteDisplay = state["display"]
paint(display)

if display.error is not None:
    action = render_error_prompt(display.error, key="quote_error")
    if action == PromptAction.DISMISS:
        state["display"] = display.without_error()
        st.rerun()
    elif action == PromptAction.RETRY:
        state["retry"] = True
        st.rerun()
