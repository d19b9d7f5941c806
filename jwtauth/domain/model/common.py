"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for domain entities.

    Entities are frozen; state changes go through methods that return
    an updated copy, which the caller then hands to a repository.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
