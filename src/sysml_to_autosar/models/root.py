"""Root model for sysml2ar source documents."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sysml_to_autosar.models.elements import PackageDefinition
from sysml_to_autosar.models.meta import Meta

SCHEMA_VERSION = "sysml2ar/v1"


class SourceDocument(BaseModel):
    """Root model for sysml2ar YAML/JSON files.

    This is the top-level model that represents the whole architecture
    description. It validates the schema version and holds the packages
    that are turned into the source graph.

    Example:
    -------
        ```yaml
        schema: sysml2ar/v1
        meta:
          name: Powertrain
          revision: "1.0.0"
        packages:
          - name: Powertrain
            interfaces:
              - name: IEngineControl
                items:
                  - name: Start
                    stereotypes: [operationWevent]
                    tags: {event: evStart}
            components:
              - name: EngineCtrl
                ports:
                  - name: pEngine
                    provides: [IEngineControl]
        ```

    """

    model_config = ConfigDict(
        # Allow population by field name AND alias
        populate_by_name=True,
        # Forbid extra fields not defined in the model
        extra="forbid",
        validate_default=True,
    )

    # Using alias because "schema" shadows a BaseModel attribute
    schema_version: Annotated[
        Literal["sysml2ar/v1"],
        Field(alias="schema", description="Schema version identifier"),
    ]
    meta: Annotated[Meta, Field(description="Document metadata")]
    packages: Annotated[
        list[PackageDefinition],
        Field(min_length=1, description="Top-level packages"),
    ]

    @model_validator(mode="after")
    def validate_unique_package_names(self) -> SourceDocument:
        """Package names must be unique; they become root AR-PACKAGE names."""
        seen: set[str] = set()
        for package in self.packages:
            if package.name in seen:
                raise ValueError(f"Duplicate package name: '{package.name}'")
            seen.add(package.name)
        return self
