"""
Species API Client

Endpoints (relative to the configured base URL):
  GET    {base}         - List all species
  POST   {base}         - Create new species
  PUT    {base}/{id}    - Update species
  DELETE {base}/{id}    - Delete species

Any 2xx status is success. Every other status is reported uniformly as
SpeciesResponseError; transport failures become SpeciesConnectionError.
"""

import logging
from typing import List, Optional

import requests
from pydantic import ValidationError

from species_admin.config import DEFAULT_API_URL
from species_admin.models import SpeciesRead, SpeciesWrite

logger = logging.getLogger(__name__)


class SpeciesAPIError(Exception):
    """Base error for species API calls"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SpeciesConnectionError(SpeciesAPIError):
    """The request never got a response (network unreachable, refused, timed out)"""


class SpeciesResponseError(SpeciesAPIError):
    """The server answered with a non-2xx status"""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class SpeciesPayloadError(SpeciesAPIError):
    """The list response body was not a JSON array of species"""


class SpeciesAPIClient:
    """Client for the species REST collection."""

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the species API client.

        Args:
            base_url: Collection URL, e.g. http://localhost:8000/api/species
            timeout: Request timeout in seconds (default: None, wait indefinitely)
            session: Pre-built session, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            "User-Agent": "SpeciesAdmin/1.0",
            "Accept": "application/json",
        })

    def _entity_url(self, species_id: int) -> str:
        return f"{self.base_url}/{species_id}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise SpeciesConnectionError(f"{method} {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise SpeciesResponseError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def list_species(self) -> List[SpeciesRead]:
        """
        Fetch the full species collection.

        Returns:
            Species in the order the server returned them (may be empty)

        Raises:
            SpeciesConnectionError, SpeciesResponseError, SpeciesPayloadError
        """
        response = self._request("GET", self.base_url)

        try:
            data = response.json()
        except ValueError as e:
            raise SpeciesPayloadError(f"Species list is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise SpeciesPayloadError(f"Expected a JSON array of species, got {type(data).__name__}")

        try:
            return [SpeciesRead.model_validate(item) for item in data]
        except ValidationError as e:
            raise SpeciesPayloadError(f"Invalid species record: {e}") from e

    def create_species(self, species: SpeciesWrite) -> requests.Response:
        """Create a new species (POST to the collection)."""
        return self._request("POST", self.base_url, json=species.model_dump())

    def update_species(self, species_id: int, species: SpeciesWrite) -> requests.Response:
        """Replace name and description of an existing species (PUT)."""
        return self._request("PUT", self._entity_url(species_id), json=species.model_dump())

    def delete_species(self, species_id: int) -> requests.Response:
        """Delete a species by ID."""
        return self._request("DELETE", self._entity_url(species_id))

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
