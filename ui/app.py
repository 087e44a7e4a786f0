"""
Calculation Sheet UI

Streamlit entry point: one editor panel for the sheet and one panel for
snapshot import/export. Run with `streamlit run ui/app.py`.
"""

from pathlib import Path
import logging
import sys
import streamlit as st

# Ensure project root is on sys.path to enable calcsheet imports
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from calcsheet.config import load_config
from calcsheet.io_paths import CONFIG_PATH, LOGS_DIR
from calcsheet.utils_logging import configure_logging
from ui.state import SheetUIState
from ui.services import SnapshotService, ValidationService
from ui.components.sheet_editor import render_sheet_editor
from ui.components.snapshot_panel import render_snapshot_panel


st.set_page_config(page_title="Calculation Sheet", page_icon="🧮", layout="wide", initial_sidebar_state="collapsed")

logger = logging.getLogger("ui")


def main() -> None:
    # Initialize state once per browser session
    if "sheet_state" not in st.session_state:
        configure_logging(LOGS_DIR)
        config = load_config(CONFIG_PATH)
        st.session_state["sheet_state"] = SheetUIState.from_config(config)
        logger.info("Started sheet session with %d column(s)", config.column_count)
    state: SheetUIState = st.session_state["sheet_state"]

    # Initialize services
    snapshot_service = SnapshotService()
    validation_service = ValidationService()

    st.title("🧮 Calculation Sheet")
    caption = f"Snapshot: {state.snapshot_name}"
    if state.has_unsaved_changes:
        caption += " (unsaved changes)"
    st.caption(caption)

    tabs = st.tabs(["Sheet", "Snapshot"])
    with tabs[0]:
        render_sheet_editor(state, validation_service)
    with tabs[1]:
        render_snapshot_panel(state, snapshot_service, validation_service)


if __name__ == "__main__":
    main()
