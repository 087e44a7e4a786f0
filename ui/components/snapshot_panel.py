from __future__ import annotations

"""
Snapshot import/export panel for Streamlit.

Shows the current sheet as JSON (with a download button), accepts pasted
JSON for import after validation, and saves/loads named snapshots through
`SnapshotService`.
"""

import streamlit as st

from calcsheet.snapshot import snapshot_to_json

from .base_component import BaseComponent
from ui.services import SnapshotService, ValidationService


class SnapshotPanel(BaseComponent):
    """Import/export and named snapshot files."""

    def __init__(self, state, snapshot_service: SnapshotService, validation_service: ValidationService) -> None:
        super().__init__(state)
        self.snapshot_service = snapshot_service
        self.validation_service = validation_service

    def render(self) -> None:
        st.header("Snapshot")
        self._render_export()
        st.divider()
        self._render_import()
        st.divider()
        self._render_files()

    def _render_export(self) -> None:
        st.subheader("Export")
        text = snapshot_to_json(self.state.to_snapshot_dict())
        st.code(text, language="json")
        st.download_button(
            "Download JSON",
            data=text,
            file_name=f"{self.state.snapshot_name}.json",
            mime="application/json",
        )

    def _render_import(self) -> None:
        st.subheader("Import")
        st.caption("Paste a JSON object of row labels to {column letter: number or null}.")
        text = st.text_area("Snapshot JSON", value="", height=200, key="snapshot_import_text")
        if not st.button("Import", key="snapshot_import_btn"):
            return
        data, errors, warnings = self.validation_service.parse_snapshot_text(text, self.state.store.column_count)
        for message in warnings:
            st.warning(message)
        if errors:
            for message in errors:
                st.error(message)
            return
        self.state.load_from_snapshot_dict(data)
        st.success(f"Imported {len(self.state.store)} row(s)")

    def _render_files(self) -> None:
        st.subheader("Saved snapshots")
        col_name, col_save = st.columns([3, 1])
        with col_name:
            name = st.text_input("Name", value=self.state.snapshot_name, key="snapshot_name")
        with col_save:
            if st.button("Save", key="snapshot_save_btn"):
                if self.save_changes_as(name):
                    st.success(f"Saved '{name}'")

        names = self.snapshot_service.list_snapshots()
        if not names:
            st.info("No saved snapshots yet.")
            return
        selected = st.selectbox("Load snapshot", options=names, key="snapshot_load_pick")
        if st.button("Load", key="snapshot_load_btn"):
            data, error = self.snapshot_service.try_load(selected)
            if data is None:
                st.error(error)
                return
            ok, errors, warnings = self.snapshot_service.validate_snapshot(data, self.state.store.column_count)
            for message in warnings:
                st.warning(message)
            if not ok:
                for message in errors:
                    st.error(message)
                return
            self.state.load_from_snapshot_dict(data, name=selected)
            st.success(f"Loaded '{selected}'")

    def save_changes_as(self, name: str) -> bool:
        ok, message = self.validation_service.validate_snapshot_name(name)
        if not ok:
            st.error(message)
            return False
        self.snapshot_service.save_snapshot(self.state.to_snapshot_dict(), name)
        self.state.mark_saved(name)
        return True

    def save_changes(self) -> bool:
        return self.save_changes_as(self.state.snapshot_name)


def render_snapshot_panel(state, snapshot_service: SnapshotService, validation_service: ValidationService) -> None:
    SnapshotPanel(state, snapshot_service, validation_service).render()
