"""Common UI components shared across pages.

Pure rendering functions for reusable Streamlit widgets.
"""

import streamlit as st

from quotedesk.core.domain_models import CompanyDirectory


def company_selection(
    directory: CompanyDirectory,
    on_sidebar: bool = True,
    default_index: int = 0,
) -> int:
    """Render a company selection dropdown.

    Args:
        directory: Loaded company directory; options keep its order
        on_sidebar: Place the widget in the sidebar
        default_index: Initially selected row

    Returns:
        Index of the selected company in `directory.names`
    """
    container = st.sidebar if on_sidebar else st
    selected_name = container.selectbox(
        "Select Company",
        options=list(directory.names),
        index=default_index,
        key="selected_company",
    )
    return directory.names.index(selected_name)


def render_sidebar_header(title: str, description: str | None = None) -> None:
    """Render consistent sidebar header with optional description.

    Args:
        title: Main sidebar title
        description: Optional description text below title
    """
    st.sidebar.title(title)
    if description:
        st.sidebar.caption(description)
    st.sidebar.divider()


def render_empty_state(message: str, icon: str = "📊") -> None:
    """Render empty state placeholder when no data is available.

    Args:
        message: Message to display
        icon: Emoji icon to show
    """
    st.info(f"{icon} {message}")
