"""
Species list controller.

Keeps the rendered species list in sync with the API and drives the
create/edit form. Every successful mutation is followed by a full reload of
the collection; failures are reported once through the notifier and leave
local state as it was.
"""

import logging
from typing import Optional, Protocol

from species_admin.clients.species_api import (
    SpeciesAPIClient,
    SpeciesAPIError,
    SpeciesConnectionError,
)
from species_admin.models import FormMode, FormState, ListView

logger = logging.getLogger(__name__)

CONFIRM_DELETE_MESSAGE = "Are you sure you want to delete this species?"
DELETED_MESSAGE = "Species deleted!"
DELETE_FAILED_MESSAGE = "Error deleting species."
CREATED_MESSAGE = "Species created successfully!"
UPDATED_MESSAGE = "Species updated successfully!"
SAVE_FAILED_MESSAGE = "Error saving on the server."
CONNECTION_ERROR_MESSAGE = "Connection error."


class Notifier(Protocol):
    """Blocking user dialogs"""

    def confirm(self, message: str) -> bool:
        ...

    def alert(self, message: str) -> None:
        ...


class FormClosedError(RuntimeError):
    """Raised when submitting while the form is not shown"""


class SpeciesListController:
    """Owns the species list view and the create/edit form state."""

    def __init__(self, client: SpeciesAPIClient, notifier: Notifier):
        self.client = client
        self.notifier = notifier
        self.form = FormState()
        self.view = ListView()

    # ------------------------------------------------------------------
    # Form
    # ------------------------------------------------------------------

    def open_create_form(self) -> FormState:
        """Reset the form and show it in create mode. No network call."""
        self.form = FormState(mode=FormMode.CREATE)
        return self.form

    def prepare_edit(self, species_id: int, name: str, description: Optional[str]) -> FormState:
        """Fill the form from an existing row and show it in edit mode. No network call."""
        self.form = FormState(
            mode=FormMode.EDIT,
            editing_id=species_id,
            name=name,
            description=description or "",
        )
        return self.form

    def close_form(self) -> FormState:
        """Hide the form. Field values and editing_id are kept."""
        self.form.mode = FormMode.CLOSED
        return self.form

    # ------------------------------------------------------------------
    # List
    # ------------------------------------------------------------------

    def load_list(self) -> bool:
        """
        Re-fetch the collection and replace the view.

        Returns:
            True if the view was replaced, False if the read failed and the
            previous view was kept
        """
        try:
            species = self.client.list_species()
        except SpeciesConnectionError:
            logger.exception("Failed to fetch species list")
            return False
        except SpeciesAPIError as e:
            logger.error(f"Failed to fetch species list: {e.message}")
            return False

        self.view = ListView.from_species(species)
        logger.debug(f"Loaded {self.view.count} species")
        return True

    def ensure_loaded(self) -> bool:
        """Load the list once, on first display."""
        if self.view.loaded:
            return True
        return self.load_list()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def delete_entity(self, species_id: int) -> bool:
        """
        Delete a species after user confirmation.

        Returns:
            True if the species was deleted
        """
        if not self.notifier.confirm(CONFIRM_DELETE_MESSAGE):
            return False

        try:
            self.client.delete_species(species_id)
        except SpeciesConnectionError:
            logger.exception(f"Error deleting species {species_id}")
            self.notifier.alert(CONNECTION_ERROR_MESSAGE)
            return False
        except SpeciesAPIError as e:
            logger.warning(f"Delete of species {species_id} rejected: {e.message}")
            self.notifier.alert(DELETE_FAILED_MESSAGE)
            return False

        logger.info(f"Deleted species {species_id}")
        self.notifier.alert(DELETED_MESSAGE)
        self.load_list()
        return True

    def submit_form(self, name: Optional[str] = None, description: Optional[str] = None) -> bool:
        """
        Create or update depending on editing_id.

        Args:
            name: Current value of the name widget, if it differs from the form state
            description: Current value of the description widget

        Returns:
            True if the save succeeded (form closed, list reloaded)

        Raises:
            FormClosedError: If the form is not open
        """
        if not self.form.is_open:
            raise FormClosedError("Cannot submit a closed form")

        if name is not None:
            self.form.name = name
        if description is not None:
            self.form.description = description

        payload = self.form.to_payload()
        editing_id = self.form.editing_id

        try:
            if editing_id is None:
                self.client.create_species(payload)
            else:
                self.client.update_species(editing_id, payload)
        except SpeciesConnectionError:
            logger.exception("Error saving species")
            self.notifier.alert(CONNECTION_ERROR_MESSAGE)
            return False
        except SpeciesAPIError as e:
            logger.warning(f"Save rejected: {e.message}")
            self.notifier.alert(SAVE_FAILED_MESSAGE)
            return False

        if editing_id is None:
            logger.info(f"Created species {payload.name!r}")
            self.notifier.alert(CREATED_MESSAGE)
        else:
            logger.info(f"Updated species {editing_id}")
            self.notifier.alert(UPDATED_MESSAGE)

        self.close_form()
        self.load_list()
        return True
