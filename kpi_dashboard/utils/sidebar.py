"""Shared sidebar: branding, navigation and logout.

Calling ``render_sidebar()`` also injects the shared CSS design system, so
pages do not need to call ``inject_css()`` separately.
"""

from typing import Callable, Optional

import streamlit as st

from kpi_dashboard.utils.constants import HOME_PAGE
from kpi_dashboard.utils.styles import inject_css


def render_sidebar(on_logout: Optional[Callable[[], None]] = None) -> None:
    """Render the navigation sidebar; shows a Logout button when on_logout is given."""

    inject_css()

    with st.sidebar:
        st.markdown(
            """
            <div class="sb-brand">
                <div class="sb-brand-name">⚽ Football KPIs</div>
                <div class="sb-brand-tagline">Team performance by season</div>
            </div>
            """,
            unsafe_allow_html=True,
        )

        st.page_link(HOME_PAGE, label="📊  Team KPI Analysis")

        if on_logout is not None:
            st.divider()
            if st.button("🚪 Logout", key="_sidebar_logout", use_container_width=True):
                on_logout()

        st.markdown(
            "<div class='sb-footer'>Internal use · data from the football statistics service</div>",
            unsafe_allow_html=True,
        )
