"""
Species Admin Models

- SQLModel schemas for the species API payloads (validation + serialisation)
- Dataclasses for the local form state and the rendered list
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from sqlmodel import Field, SQLModel

NO_DESCRIPTION = "No description"


# ============================================================================
# API Models
# ============================================================================

class SpeciesBase(SQLModel):
    """Base species fields"""
    name: str = Field(description="Species name")
    description: Optional[str] = Field(None, description="Free-text description")


class SpeciesWrite(SpeciesBase):
    """Request body for both create (POST) and update (PUT)"""
    pass


class SpeciesRead(SpeciesBase):
    """Model for reading a species (includes ID)"""
    id: int


# ============================================================================
# Form State
# ============================================================================

class FormMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


FORM_TITLES = {
    FormMode.CREATE: "New Species",
    FormMode.EDIT: "Edit Species",
}


@dataclass
class FormState:
    """Create/edit form contents. editing_id decides POST vs PUT on submit."""
    mode: FormMode = FormMode.CLOSED
    editing_id: Optional[int] = None
    name: str = ""
    description: str = ""

    @property
    def is_open(self) -> bool:
        return self.mode is not FormMode.CLOSED

    @property
    def title(self) -> Optional[str]:
        return FORM_TITLES.get(self.mode)

    def to_payload(self) -> SpeciesWrite:
        return SpeciesWrite(name=self.name, description=self.description)


# ============================================================================
# List View
# ============================================================================

@dataclass(frozen=True)
class SpeciesRow:
    """One rendered row. Actions are bound to these values, never to markup."""
    id: int
    name: str
    description: Optional[str] = None

    @classmethod
    def from_species(cls, species: SpeciesRead) -> "SpeciesRow":
        return cls(id=species.id, name=species.name, description=species.description)

    @property
    def display_description(self) -> str:
        return self.description or NO_DESCRIPTION

    @property
    def edit_args(self) -> Tuple[int, str, str]:
        return (self.id, self.name, self.description or "")

    @property
    def delete_args(self) -> Tuple[int]:
        return (self.id,)


@dataclass(frozen=True)
class ListView:
    rows: Tuple[SpeciesRow, ...] = field(default_factory=tuple)
    loaded: bool = False

    @classmethod
    def from_species(cls, species_list) -> "ListView":
        return cls(rows=tuple(SpeciesRow.from_species(s) for s in species_list), loaded=True)

    @property
    def count(self) -> int:
        return len(self.rows)

    @property
    def empty_state_visible(self) -> bool:
        return self.loaded and not self.rows

    @property
    def list_visible(self) -> bool:
        return bool(self.rows)
