"""Shared constants for the dashboard."""

# ---------------------------------------------------------------------------
# KPIs offered by the football data service
# ---------------------------------------------------------------------------
KPI_LABELS = {
    "won": "Matches Won",
    "draw": "Matches Drawn",
    "lost": "Matches Lost",
    "goalsFor": "Goals For",
    "goalsAgainst": "Goals Against",
}

KPI_NAMES = list(KPI_LABELS)

# Season years selectable in the form (inclusive).
FIRST_YEAR = 2020
YEAR_OPTIONS = [FIRST_YEAR + i for i in range(5)]

# ---------------------------------------------------------------------------
# Local cache keys
# ---------------------------------------------------------------------------
FOOTBALL_DATA_KEY = "football_data"
TEAM_NAMES_KEY = "team_names"
ID_TOKEN_KEY = "id_token"
SESSION_TIME_KEY = "session_time"

# ---------------------------------------------------------------------------
# Team filter
# ---------------------------------------------------------------------------
ALL_TEAMS_OPTION = "all"
ALL_TEAMS_LABEL = "Choose All"
TEAM_NAME_SEPARATOR = ", "

# ---------------------------------------------------------------------------
# Chart
# ---------------------------------------------------------------------------
SEASON_COLORS = ["#1890ff", "#52c41a"]

# Page paths (relative to app.py) for st.switch_page / st.page_link
HOME_PAGE = "app.py"
LOGIN_PAGE = "pages/1_🔑_Login.py"
