"""Shared fixtures: an in-memory species backend behind a fake requests session."""

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest
import requests

from species_admin.clients.species_api import SpeciesAPIClient
from species_admin.controllers.species_list import SpeciesListController

BASE_URL = "http://testserver/api/species"


class FakeResponse:
    def __init__(self, status_code: int, body: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is None else json.dumps(body))

    def json(self):
        if self._body is None:
            # Same contract as requests: undecodable bodies raise a ValueError subclass
            return json.loads(self.text)
        return self._body


class FakeSpeciesBackend:
    """Implements the species HTTP contract in memory and records every request."""

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.headers: Dict[str, str] = {}
        self.records: Dict[int, Dict[str, Any]] = {}
        self.requests: List[Tuple[str, str, Optional[dict]]] = []
        self.next_id = 1
        self.fail_with: Optional[int] = None
        self.raise_error: Optional[Exception] = None
        self.list_override: Optional[FakeResponse] = None
        self.closed = False

    def add(self, name: str, description: Optional[str] = None) -> int:
        species_id = self.next_id
        self.next_id += 1
        self.records[species_id] = {"id": species_id, "name": name, "description": description}
        return species_id

    def count(self, method: str) -> int:
        return sum(1 for m, _, _ in self.requests if m == method)

    def close(self):
        self.closed = True

    def request(self, method: str, url: str, timeout=None, json=None, **kwargs):
        self.requests.append((method, url, json))
        if self.raise_error is not None:
            raise self.raise_error
        if self.fail_with is not None:
            return FakeResponse(self.fail_with, {"detail": "failure"})

        if url == self.base_url:
            if method == "GET":
                if self.list_override is not None:
                    return self.list_override
                return FakeResponse(200, list(self.records.values()))
            if method == "POST":
                species_id = self.add(json["name"], json.get("description"))
                return FakeResponse(201, self.records[species_id])
            return FakeResponse(405, {"detail": "Method not allowed"})

        species_id = int(url.rsplit("/", 1)[1])
        if species_id not in self.records:
            return FakeResponse(404, {"detail": f"Species {species_id} not found"})
        if method == "PUT":
            self.records[species_id].update(name=json["name"], description=json.get("description"))
            return FakeResponse(200, self.records[species_id])
        if method == "DELETE":
            del self.records[species_id]
            return FakeResponse(204)
        return FakeResponse(405, {"detail": "Method not allowed"})


class RecordingNotifier:
    def __init__(self, answer: bool = True):
        self.answer = answer
        self.confirmations: List[str] = []
        self.alerts: List[str] = []

    def confirm(self, message: str) -> bool:
        self.confirmations.append(message)
        return self.answer

    def alert(self, message: str) -> None:
        self.alerts.append(message)


@pytest.fixture
def backend():
    return FakeSpeciesBackend()


@pytest.fixture
def client(backend):
    return SpeciesAPIClient(BASE_URL, session=backend)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def controller(client, notifier):
    return SpeciesListController(client, notifier)


@pytest.fixture
def connection_error():
    return requests.ConnectionError("Connection refused")
