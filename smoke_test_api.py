#!/usr/bin/env python3
"""
Smoke test for the species API

Runs a create -> list -> update -> delete cycle against a live backend
through SpeciesAPIClient.
Run this script with: python3 smoke_test_api.py [--url http://localhost:8000/api/species]
"""

import argparse

from species_admin.clients.species_api import SpeciesAPIClient, SpeciesAPIError
from species_admin.config import configure_logging, get_settings
from species_admin.models import SpeciesRead, SpeciesWrite

# Color codes for terminal output
GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BLUE = '\033[94m'
RESET = '\033[0m'

SMOKE_NAME = "Ipê"
SMOKE_UPDATED_NAME = "Ipê-Amarelo"


def print_section(title: str):
    """Print a formatted section header"""
    print(f"\n{BLUE}{'='*70}{RESET}")
    print(f"{BLUE}{title:^70}{RESET}")
    print(f"{BLUE}{'='*70}{RESET}\n")


def print_success(message: str):
    print(f"{GREEN}✓ {message}{RESET}")


def print_error(message: str):
    print(f"{RED}✗ {message}{RESET}")


def print_info(message: str):
    print(f"{YELLOW}ℹ {message}{RESET}")


def find_created(before: list[SpeciesRead], after: list[SpeciesRead], name: str) -> SpeciesRead:
    """The create endpoint may not echo the record, so diff the two listings."""
    known_ids = {s.id for s in before}
    for species in after:
        if species.id not in known_ids and species.name == name:
            return species
    raise AssertionError(f"Created species {name!r} not found in listing")


def check_species_cycle(client: SpeciesAPIClient) -> bool:
    """Create, read back, update and delete a species"""
    print_section("Species API")

    try:
        before = client.list_species()
        print_success(f"Found {len(before)} species")

        print_info(f"Creating species {SMOKE_NAME!r}...")
        client.create_species(SpeciesWrite(name=SMOKE_NAME, description="Smoke test"))
        after_create = client.list_species()
        created = find_created(before, after_create, SMOKE_NAME)
        print_success(f"Created species: {created.name} (ID: {created.id})")

        print_info("Updating species...")
        client.update_species(created.id, SpeciesWrite(name=SMOKE_UPDATED_NAME, description="Smoke test"))
        after_update = client.list_species()
        updated = next(s for s in after_update if s.id == created.id)
        if updated.name != SMOKE_UPDATED_NAME or len(after_update) != len(after_create):
            raise AssertionError(f"Unexpected state after update: {updated!r}")
        print_success(f"Updated species name to: {updated.name}")

        print_info("Deleting species...")
        client.delete_species(created.id)
        after_delete = client.list_species()
        if any(s.id == created.id for s in after_delete):
            raise AssertionError(f"Species {created.id} still listed after delete")
        print_success("Deleted species")

        return True

    except (SpeciesAPIError, AssertionError, StopIteration) as e:
        print_error(f"Species smoke test failed: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--url", help="Species collection URL (default: from settings)")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)
    url = args.url or settings.api_url

    print(f"\n{BLUE}{'='*70}")
    print(f"{'Species API Smoke Test':^70}")
    print(f"{'='*70}{RESET}\n")
    print_info(f"Target: {url}")

    with SpeciesAPIClient(url, timeout=settings.timeout) as client:
        passed = check_species_cycle(client)

    print(f"\n{BLUE}{'─'*70}{RESET}")
    if passed:
        print(f"{GREEN}Smoke test passed!{RESET}")
    else:
        print(f"{YELLOW}Smoke test failed{RESET}")
    print(f"{BLUE}{'─'*70}{RESET}\n")
    return 0 if passed else 1


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        print(f"\n\n{YELLOW}Test interrupted by user{RESET}\n")
