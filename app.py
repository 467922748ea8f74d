import streamlit as st

# Set page config - MUST be the first Streamlit command
st.set_page_config(
    page_title="Volcanoes of the World",
    page_icon="🌋",
    layout="wide",
    menu_items={
        'About': 'Interactive map of the world\'s volcanoes: color by type, opacity by recency of the last eruption, size by elevation.'
    }
)

import os
import logging

from utils.config import CONFIG
from utils.data_loader import get_volcano_data, DatasetLoadError
from utils.view_state import ViewState
from views.map_view import render_map_view
from views.detail_view import render_detail_view

# Initialize logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Load custom CSS
try:
    css_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets", "custom.css")
    with open(css_path) as f:
        st.markdown(f"<style>{f.read()}</style>", unsafe_allow_html=True)
except Exception as e:
    st.warning(f"Error loading CSS: {str(e)}")

# Initialize session state variables at the start
if 'map_nonce' not in st.session_state:
    st.session_state.map_nonce = 0

# Load the dataset - both views need it
try:
    dataset = get_volcano_data(CONFIG["data_path"])
except DatasetLoadError as e:
    logger.error(str(e))
    st.error(f"Error loading volcano data: {str(e)}")
    st.stop()

state = ViewState.from_dataset(dataset)

# The `id` query parameter selects the detail view
if "id" in st.query_params:
    render_detail_view(state, st.query_params.get("id"))
else:
    render_map_view(state)
