"""Models for the elements of a source package."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sysml_to_autosar.models.common import ElementDefinition, Identifier, StereotypeList

DataTypeKindName = Literal["enumeration", "typedef", "primitive"]
ComponentKindName = Literal["software_component", "block"]


class LiteralDefinition(BaseModel):
    """A single enumeration literal.

    Example:
    -------
        ```yaml
        - name: PARK
          value: 0
        ```

    """

    model_config = ConfigDict(extra="forbid")

    name: Identifier
    value: Annotated[
        int | None,
        Field(default=None, description="Numeric value; defaults to the literal's position"),
    ]


class DataTypeDefinition(ElementDefinition):
    """A data type: enumeration, typedef or primitive.

    Example:
    -------
        ```yaml
        - name: GearPosition
          kind: enumeration
          literals:
            - {name: PARK, value: 0}
            - {name: DRIVE, value: 1}
        - name: Speed_t
          kind: typedef
          tags: {unit: kmh}
        ```

    """

    kind: Annotated[
        DataTypeKindName,
        Field(default="primitive", description="Data type kind"),
    ]
    literals: Annotated[
        list[LiteralDefinition],
        Field(default_factory=list, description="Enumeration literals in order"),
    ]

    @model_validator(mode="after")
    def validate_literals(self) -> DataTypeDefinition:
        """Only enumerations carry literals, and they must have at least one."""
        if self.kind == "enumeration" and not self.literals:
            raise ValueError(f"Enumeration '{self.name}' must define at least one literal")
        if self.kind != "enumeration" and self.literals:
            raise ValueError(f"Only enumerations may define literals (type '{self.name}')")
        return self


class ArgumentDefinition(ElementDefinition):
    """An operation or event argument."""

    type: Annotated[
        str | None,
        Field(default=None, description="Name of the argument's data type"),
    ]


class EventDefinition(ElementDefinition):
    """A package-level event.

    Example:
    -------
        ```yaml
        - name: evSpeedChanged
          arguments:
            - {name: speed, type: Speed_t}
          tags: {type: Speed_t}
        ```

    """

    arguments: Annotated[
        list[ArgumentDefinition],
        Field(default_factory=list, description="Event arguments"),
    ]


class OperationDefinition(ElementDefinition):
    """An operation of an interface or a component.

    Example:
    -------
        ```yaml
        - name: Start
          stereotypes: [operationWevent]
          tags: {event: evStart}
        ```

    """

    kind: Literal["operation"] = "operation"
    arguments: Annotated[
        list[ArgumentDefinition],
        Field(default_factory=list, description="Operation arguments"),
    ]


class ReceptionDefinition(BaseModel):
    """Reception of an event by an interface.

    The reception name defaults to the event name.
    """

    model_config = ConfigDict(extra="forbid")

    kind: Literal["reception"] = "reception"
    event: Identifier
    name: Annotated[
        Identifier | None,
        Field(default=None, description="Reception name (defaults to event name)"),
    ]
    stereotypes: Annotated[StereotypeList, Field(default_factory=list)]

    @property
    def effective_name(self) -> str:
        return self.name or self.event


InterfaceItemDefinition = OperationDefinition | ReceptionDefinition


class InterfaceDefinition(ElementDefinition):
    """An interface with its ordered items."""

    items: Annotated[
        list[InterfaceItemDefinition],
        Field(default_factory=list, description="Operations and receptions in order"),
    ]


class PortDefinition(ElementDefinition):
    """A component port.

    Example:
    -------
        ```yaml
        - name: pEngine
          provides: [IEngineControl]
        ```

    """

    provides: Annotated[
        list[Identifier],
        Field(default_factory=list, description="Names of provided interfaces"),
    ]
    requires: Annotated[
        list[Identifier],
        Field(default_factory=list, description="Names of required interfaces"),
    ]


class AttributeDefinition(ElementDefinition):
    """A component attribute."""

    type: Annotated[
        str | None,
        Field(default=None, description="Name of the attribute's data type"),
    ]
    static: Annotated[
        bool,
        Field(default=False, description="Whether the attribute is static"),
    ]


class ComponentDefinition(ElementDefinition):
    """A software component (or plain block) with ports, operations and attributes."""

    kind: Annotated[
        ComponentKindName,
        Field(default="software_component", description="Classifier kind"),
    ]
    ports: Annotated[list[PortDefinition], Field(default_factory=list)]
    operations: Annotated[list[OperationDefinition], Field(default_factory=list)]
    attributes: Annotated[list[AttributeDefinition], Field(default_factory=list)]


class InstanceDefinition(ElementDefinition):
    """A part typed by a component."""

    type: Identifier


class LinkEndpoint(BaseModel):
    """One end of a link."""

    model_config = ConfigDict(extra="forbid")

    instance: Identifier
    port: Identifier


class LinkDefinition(BaseModel):
    """A link between two instance ports.

    Example:
    -------
        ```yaml
        - from: {instance: itsEngine, port: pSpeed}
          to: {instance: itsDashboard, port: rSpeed}
        ```

    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Annotated[
        Identifier | None,
        Field(default=None, description="Link name (defaults to <from>_<to>)"),
    ]
    from_: Annotated[LinkEndpoint, Field(alias="from")]
    to: LinkEndpoint

    @property
    def effective_name(self) -> str:
        if self.name:
            return self.name
        return f"{self.from_.instance}_{self.from_.port}_{self.to.instance}_{self.to.port}"


class PackageDefinition(ElementDefinition):
    """A package and all of its content."""

    types: Annotated[list[DataTypeDefinition], Field(default_factory=list)]
    events: Annotated[list[EventDefinition], Field(default_factory=list)]
    interfaces: Annotated[list[InterfaceDefinition], Field(default_factory=list)]
    components: Annotated[list[ComponentDefinition], Field(default_factory=list)]
    instances: Annotated[list[InstanceDefinition], Field(default_factory=list)]
    links: Annotated[list[LinkDefinition], Field(default_factory=list)]
