"""Dump the target model as YAML for review and diffing."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from sysml_to_autosar.target.base import ARElement, FieldRole, role_fields
from sysml_to_autosar.target.elements import Limit
from sysml_to_autosar.target.model import ARModel

logger = logging.getLogger(__name__)


def node_to_dict(node: ARElement) -> dict[str, Any]:
    """Convert a target node and everything it contains to plain data.

    References are written as absolute paths; empty fields are left out.
    """
    data: dict[str, Any] = {"kind": node.kind.value}
    if node.REFERRABLE and node.short_name:
        data["short_name"] = node.short_name

    for f in role_fields(type(node)):
        value = getattr(node, f.name)
        if value is None or (isinstance(value, list) and not value):
            continue
        role = f.metadata["role"]
        if role is FieldRole.REFERENCE:
            data[f.name] = value.path
        elif role is FieldRole.CONTAINED:
            if isinstance(value, list):
                data[f.name] = [node_to_dict(child) for child in value]
            else:
                data[f.name] = node_to_dict(value)
        elif isinstance(value, Limit):
            data[f.name] = {"value": value.value, "interval_type": value.interval_type}
        else:
            data[f.name] = value
    return data


def model_to_dict(model: ARModel) -> dict[str, Any]:
    """Convert the whole model to plain data."""
    return {
        "name": model.name,
        "packages": [node_to_dict(package) for package in model.packages],
    }


class YamlWriter:
    """Serialize an ARModel to YAML.

    Usage:
        YamlWriter().write(model, Path("output.yaml"))
    """

    def write(self, model: ARModel, output_path: Path) -> None:
        """Write the model to a YAML file, creating parent directories."""
        text = self.write_text(model)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        logger.info("Wrote YAML dump to %s", output_path)

    def write_text(self, model: ARModel) -> str:
        return yaml.safe_dump(
            model_to_dict(model),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
