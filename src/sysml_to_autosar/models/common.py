"""Common types and base models for the source document schema."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints


def normalize_stereotypes(value: Any) -> Any:
    """Accept a single stereotype name where a list is expected.

    Args:
    ----
        value: Input value - a string, a list of strings, or None

    Returns:
    -------
        List of stereotype names (unchanged if already a list)

    Examples:
    --------
        >>> normalize_stereotypes("operationWevent")
        ['operationWevent']
        >>> normalize_stereotypes(None)
        []

    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


# Model element names must be usable as AUTOSAR short names
Identifier = Annotated[
    str,
    StringConstraints(min_length=1, pattern=r"^[A-Za-z_][A-Za-z0-9_]*$"),
]

StereotypeList = Annotated[list[str], BeforeValidator(normalize_stereotypes)]


class TagDefinition(BaseModel):
    """A structured tagged value.

    Example:
    -------
        ```yaml
        tags:
          dataReceived:
            value: speed
            type: Speed_t
        ```

    """

    model_config = ConfigDict(extra="forbid")

    value: Annotated[
        str | None,
        Field(default=None, description="Textual tag value"),
    ]
    type: Annotated[
        str | None,
        Field(default=None, description="Name of the data type the tag points at"),
    ]


# A tag is either a plain scalar or a structured definition
TagValue = str | int | float | bool | TagDefinition | None


class ElementDefinition(BaseModel):
    """Base for every named model element."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Identifier
    stereotypes: Annotated[
        StereotypeList,
        Field(default_factory=list, description="Applied stereotype names"),
    ]
    tags: Annotated[
        dict[str, TagValue],
        Field(default_factory=dict, description="Tagged values by tag name"),
    ]
    description: Annotated[
        str | None,
        Field(default=None, description="Human-readable description"),
    ]
