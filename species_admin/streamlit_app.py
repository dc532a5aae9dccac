import os
import sys

import streamlit as st

# Make the species_admin package importable when launched with `streamlit run`
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from species_admin.config import configure_logging, get_settings
from species_admin.pages.species import render_species_page

st.set_page_config(
    page_title="Species Management",
    layout="wide",
    initial_sidebar_state="collapsed"
)

configure_logging(get_settings().log_level)

# Hide the automatic multipage sidebar
st.markdown("""
<style>
    [data-testid="stSidebar"] {
        display: none !important;
    }
</style>
""", unsafe_allow_html=True)

render_species_page()
