"""Shared design system for the KPI dashboard.

Import and call ``inject_css()`` at the top of every page (or rely on
``render_sidebar()`` which calls it for you).
"""

import streamlit as st

TOKENS = {
    "bg_main":        "#0D1117",
    "bg_surface":     "#161B22",
    "border":         "#30363D",
    "accent":         "#1890ff",
    "text_primary":   "#F0F6FC",
    "text_muted":     "#8B949E",
}

_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=DM+Sans:wght@400;500;600;700&display=swap');

html, body, [class*="css"] { font-family: 'DM Sans', Helvetica, Arial, sans-serif; }

.page-hero {
    padding: 1.2rem 0 0.8rem 0;
    border-bottom: 1px solid %(border)s;
    margin-bottom: 1.2rem;
}
.page-hero-title { font-size: 1.6rem; font-weight: 700; color: %(text_primary)s; }
.page-hero-sub { font-size: 0.92rem; color: %(text_muted)s; margin-top: 0.25rem; }

.sb-brand-name { font-size: 1.1rem; font-weight: 700; color: %(text_primary)s; }
.sb-brand-tagline { font-size: 0.75rem; color: %(text_muted)s; margin-bottom: 0.8rem; }
.sb-footer { font-size: 0.7rem; color: %(text_muted)s; margin-top: 1.5rem; }

</style>
""" % TOKENS


def inject_css() -> None:
    st.markdown(_CSS, unsafe_allow_html=True)
