"""
Base model shared by all Redmine response models.
"""

from typing import Any, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    A Redmine resource as returned to tool callers.

    Subclasses build themselves from the JSON object Redmine returns and
    render back to a plain dict for the tool result.
    """

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """
        Build the model from one Redmine JSON object.

        Raises:
            NotImplementedError: If the subclass does not implement this method
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """Dump the model for a tool result, leaving out unset (None) fields."""
        return self.model_dump(exclude_none=True)
