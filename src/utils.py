import logging
import sys
import streamlit as st

from src.config import DEFAULT_THEME, PlotTheme

def configure_logging(level: int = logging.INFO):
    """
    Configures the root logger for the application.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

def format_wafer_label(wafer_id: int) -> str:
    """
    Formats a wafer id as its display label, e.g. 7 -> 'WAFER-007'.
    """
    return f"WAFER-{int(wafer_id):03d}"

def load_css(file_path: str, theme: PlotTheme = DEFAULT_THEME) -> None:
    """Loads a CSS file and injects it into the Streamlit app with the theme's colour variables."""
    try:
        with open(file_path) as f:
            css = f.read()
    except FileNotFoundError:
        return

    css_variables = f"""
    <style>
        :root {{
            --background-color: {theme.background_color};
            --text-color: {theme.text_color};
        }}
        {css}
    </style>
    """
    st.markdown(css_variables, unsafe_allow_html=True)
