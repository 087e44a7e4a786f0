from __future__ import annotations

"""
Sheet editor component for Streamlit.

Renders the sheet as an editable table (label column + lettered numeric
columns) with add/remove row controls, the column sums and the grand total.
Edits are diffed against the table that was shown and forwarded to the store
one label/cell at a time, so the store applies its own input normalization.
"""

import streamlit as st

from calcsheet.editor_frame import LABEL_COLUMN, apply_editor_changes, build_editor_frame
from calcsheet.snapshot import totals_frame

from .base_component import BaseComponent
from ui.services import ValidationService


class SheetEditor(BaseComponent):
    """Editable calculation sheet."""

    def __init__(self, state, validation_service: ValidationService) -> None:
        super().__init__(state)
        self.validation_service = validation_service

    def render(self) -> None:
        st.header("Calculation Sheet")
        self._render_column_count()
        self._render_grid()
        self._render_row_controls()
        st.divider()
        self._render_totals()

    def _render_column_count(self) -> None:
        store = self.state.store
        count = st.number_input(
            "Numeric columns",
            min_value=1,
            value=int(store.column_count),
            step=1,
            key="sheet_column_count",
        )
        ok, message = self.validation_service.validate_column_count(count)
        if not ok:
            st.error(message)
            return
        if int(count) != store.column_count:
            store.configure(int(count))
            self.state.change_count += 1
            self.state.has_unsaved_changes = True
            self.state.reset_editor()
            st.rerun()

    def _render_grid(self) -> None:
        store = self.state.store
        before = build_editor_frame(store)
        column_config = {LABEL_COLUMN: st.column_config.TextColumn(LABEL_COLUMN, help="Row description")}
        for header in store.column_headers:
            column_config[header.label] = st.column_config.TextColumn(header.label)
        # Edits made through this widget must not change its key
        widget_key = f"sheet_editor_{self.state.editor_version}"
        after = st.data_editor(
            before,
            use_container_width=True,
            num_rows="fixed",
            hide_index=True,
            column_config=column_config,
            key=widget_key,
        )
        applied = apply_editor_changes(store, before, after)
        if applied:
            st.caption(f"Applied {applied} edit(s)")

    def _render_row_controls(self) -> None:
        store = self.state.store
        col_add, col_pick, col_remove = st.columns([1, 2, 1])
        with col_add:
            if st.button("Add row", key="sheet_add_row"):
                store.add_row()
                self.state.reset_editor()
                st.rerun()
        with col_pick:
            options = [row.index for row in store.rows]
            picked = st.selectbox(
                "Row to remove",
                options=options,
                format_func=lambda i: store.row_key(store.rows[i]),
                key="sheet_remove_pick",
            )
        with col_remove:
            disabled = len(store) <= 1
            if st.button("Remove row", key="sheet_remove_row", disabled=disabled):
                if picked is not None and store.remove_row(int(picked)):
                    self.state.reset_editor()
                    st.rerun()
        if len(store) <= 1:
            st.caption("The sheet always keeps at least one row.")

    def _render_totals(self) -> None:
        store = self.state.store
        st.subheader("Totals")
        st.dataframe(totals_frame(store), use_container_width=True)
        st.metric("Grand total", f"{store.grand_total():,.2f}")


def render_sheet_editor(state, validation_service: ValidationService) -> None:
    SheetEditor(state, validation_service).render()
