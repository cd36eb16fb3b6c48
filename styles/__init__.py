"""Shared style constants for MUSIX."""

COLORS = {
    "primary": "#90ee90",
    "highlight": "#00ff96",
    "background": "#101410",
    "surface": "#1c241c",
    "muted": "#888888",
    "dim": "#555555",
    "inactive": "#333333",
}

COLOR_PRIMARY = COLORS["primary"]
COLOR_HIGHLIGHT = COLORS["highlight"]
COLOR_MUTED = COLORS["muted"]
COLOR_DIM = COLORS["dim"]
COLOR_INACTIVE = COLORS["inactive"]
