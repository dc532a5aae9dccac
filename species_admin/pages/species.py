import logging
from typing import List

import streamlit as st

from species_admin.clients.species_api import SpeciesAPIClient
from species_admin.config import get_settings
from species_admin.controllers.species_list import CONFIRM_DELETE_MESSAGE, SpeciesListController
from species_admin.models import SpeciesRow

logger = logging.getLogger(__name__)

CONTROLLER_KEY = "species_controller"
NOTIFIER_KEY = "species_notifier"
MESSAGES_KEY = "species_messages"
DELETE_CONFIRM_KEY = "species_delete_confirm_id"
NAME_INPUT_KEY = "species_form_name"
DESCRIPTION_INPUT_KEY = "species_form_description"


class StreamlitNotifier:
    """Notifier backed by Streamlit session state.

    Confirmation is asked by a dialog before the controller runs, so confirm()
    only hands back the answer recorded with answer(). Alerts are queued and
    shown as toasts, which survives st.rerun().
    """

    def __init__(self):
        self.confirmation = False

    def answer(self, confirmed: bool) -> None:
        self.confirmation = confirmed

    def confirm(self, message: str) -> bool:
        answer, self.confirmation = self.confirmation, False
        return answer

    def alert(self, message: str) -> None:
        st.session_state.setdefault(MESSAGES_KEY, []).append(message)


def get_client() -> SpeciesAPIClient:
    """Build an API client for one browser session.

    requests.Session is not thread-safe and Streamlit serves each session
    on its own thread, so clients are never shared between sessions.
    """
    settings = get_settings()
    logger.info(f"Using species API at {settings.api_url}")
    return SpeciesAPIClient(settings.api_url, timeout=settings.timeout)


def get_notifier() -> StreamlitNotifier:
    if NOTIFIER_KEY not in st.session_state:
        st.session_state[NOTIFIER_KEY] = StreamlitNotifier()
    return st.session_state[NOTIFIER_KEY]


def get_controller() -> SpeciesListController:
    if CONTROLLER_KEY not in st.session_state:
        st.session_state[CONTROLLER_KEY] = SpeciesListController(get_client(), get_notifier())
    return st.session_state[CONTROLLER_KEY]


def show_pending_messages():
    messages: List[str] = st.session_state.pop(MESSAGES_KEY, [])
    for message in messages:
        st.toast(message)


def _seed_form_inputs(controller: SpeciesListController):
    # Widgets read these keys from here on, so typed values survive reruns
    st.session_state[NAME_INPUT_KEY] = controller.form.name
    st.session_state[DESCRIPTION_INPUT_KEY] = controller.form.description


def _open_create(controller: SpeciesListController):
    controller.open_create_form()
    _seed_form_inputs(controller)


def _open_edit(controller: SpeciesListController, species_id: int, name: str, description: str):
    controller.prepare_edit(species_id, name, description)
    _seed_form_inputs(controller)


def _ask_delete(species_id: int):
    st.session_state[DELETE_CONFIRM_KEY] = species_id


def _cancel_delete():
    st.session_state.pop(DELETE_CONFIRM_KEY, None)


def render_species_form(controller: SpeciesListController):
    """Create/edit dialog, shown for as long as the form is open."""

    @st.dialog(controller.form.title or "Species", on_dismiss=controller.close_form)
    def species_form_dialog():
        name = st.text_input("Name *", key=NAME_INPUT_KEY, placeholder="Enter species name")
        description = st.text_area("Description", key=DESCRIPTION_INPUT_KEY,
                                   placeholder="Habitat, flowering season, notes...")

        col1, col2 = st.columns(2)
        with col1:
            if st.button("💾 Save", key="save_species", type="primary", use_container_width=True):
                if controller.submit_form(name=name, description=description):
                    st.rerun()
                show_pending_messages()
        with col2:
            if st.button("❌ Cancel", key="cancel_species_form", use_container_width=True):
                controller.close_form()
                st.rerun()

    species_form_dialog()


def render_delete_confirmation(controller: SpeciesListController, species_id: int):
    row = next((r for r in controller.view.rows if r.id == species_id), None)

    @st.dialog("⚠️ Confirm Deletion", on_dismiss=_cancel_delete)
    def delete_confirmation():
        st.write(CONFIRM_DELETE_MESSAGE)
        if row is not None:
            st.text(row.name)
        st.warning("⚠️ **This action cannot be undone**")

        col1, col2 = st.columns(2)
        with col1:
            if st.button("🗑️ Yes, Delete", key="confirm_delete_species", type="primary",
                         use_container_width=True):
                _cancel_delete()
                get_notifier().answer(True)
                controller.delete_entity(species_id)
                st.rerun()
        with col2:
            if st.button("❌ Cancel", key="cancel_delete_species", use_container_width=True):
                _cancel_delete()
                st.rerun()

    delete_confirmation()


def render_species_row(controller: SpeciesListController, row: SpeciesRow):
    with st.container(border=True):
        col_text, col_edit, col_delete = st.columns([8, 1, 1])
        with col_text:
            # st.text never interprets markdown or HTML in user data
            st.text(row.name)
            st.text(row.display_description)
        with col_edit:
            st.button("✏️", key=f"edit_species_{row.id}", help="Edit",
                      on_click=_open_edit, args=(controller, *row.edit_args))
        with col_delete:
            st.button("🗑️", key=f"delete_species_{row.id}", help="Delete",
                      on_click=_ask_delete, args=row.delete_args)


def render_species_page():
    """Render the species list with create, edit and delete actions"""
    controller = get_controller()
    show_pending_messages()

    controller.ensure_loaded()
    view = controller.view

    col_title, col_new = st.columns([4, 1])
    with col_title:
        st.header(f"Species ({view.count})")
    with col_new:
        st.button("➕ New Species", key="new_species", type="primary", use_container_width=True,
                  on_click=_open_create, args=(controller,))

    if view.empty_state_visible:
        st.info("No species registered yet. Add one with the New Species button.")
    elif view.list_visible:
        for row in view.rows:
            render_species_row(controller, row)

    # Streamlit allows a single open dialog per run
    delete_id = st.session_state.get(DELETE_CONFIRM_KEY)
    if delete_id is not None:
        render_delete_confirmation(controller, delete_id)
    elif controller.form.is_open:
        render_species_form(controller)
