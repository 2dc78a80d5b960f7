import streamlit as st

# Priority badge colors (low = red, mid = yellow, high = green)
PRIORITY_COLORS = {
    "low": ("#FEE2E2", "#991B1B"),
    "mid": ("#FEF3C7", "#92400E"),
    "high": ("#D1FAE5", "#065F46"),
}


def priority_band(value) -> str:
    if value is None or value == "":
        return "low"
    value = int(value)
    if value <= 2:
        return "low"
    if value <= 3:
        return "mid"
    return "high"


def apply_styling():
    """Apply global CSS styling."""
    css = "<style>\n"
    for band, (bg, fg) in PRIORITY_COLORS.items():
        css += f".priority-{band} {{ background-color: {bg}; color: {fg}; font-weight: bold; border-radius: 9999px; padding: 0 0.5rem; }}\n"

    css += """
    .issue-list { font-size: 0.85rem; margin: 0; }
    .header-sub { color: #4B5563; margin-top: -0.75rem; }

    /* Improve dataframe density */
    div[data-testid="stDataFrame"] div[data-testid="stTable"] { font-size: 0.8rem; }

    /* Active tab highlight */
    button[data-baseweb="tab"][aria-selected="true"] {
        background-color: #2563EB !important;
        color: white !important;
        border-radius: 4px;
        font-weight: bold;
    }

    /* Hide Streamlit deploy button */
    .stDeployButton { display: none !important; }

    </style>
    """

    st.markdown(css, unsafe_allow_html=True)
