"""Enrichment rule for assembly connectors."""

from __future__ import annotations

from sysml_to_autosar.source.graph import Instance, Link, Port
from sysml_to_autosar.target.elements import (
    AssemblySwConnector,
    CompositionSwComponentType,
    PPortInCompositionInstanceRef,
    PPortPrototype,
    RPortInCompositionInstanceRef,
    RPortPrototype,
)
from sysml_to_autosar.transform.context import (
    TransformContext,
    ensure_component_prototype,
    ensure_composition,
)
from sysml_to_autosar.transform.diagnostics import DiagnosticCodes


def add_assembly_connector_structure(
    ctx: TransformContext, connector: AssemblySwConnector
) -> None:
    """Connect both ends of a link inside its composition.

    Each end gets a ``CtSt_<instance>`` component prototype (found or
    created, typed by the component registered for the port's owner). The
    registered port decides which side it fills: a PPortPrototype becomes the
    provider, an RPortPrototype the requester.
    """
    rule = "add_assembly_connector_structure"
    link = ctx.source_of(connector, Link, rule)
    if link is None:
        return

    composition = connector.container
    if not isinstance(composition, CompositionSwComponentType):
        composition = ensure_composition(ctx, connector)
        if composition is None:
            ctx.diagnostics.severe(
                DiagnosticCodes.M104_MISSING_COMPONENT,
                f"No composition found for link '{link.name}'",
                rule=rule,
                element=link,
            )
            return
        composition.connectors.append(connector)

    for instance, port in ((link.from_instance, link.from_port), (link.to_instance, link.to_port)):
        _connect_end(ctx, connector, composition, instance, port, rule)


def _connect_end(
    ctx: TransformContext,
    connector: AssemblySwConnector,
    composition: CompositionSwComponentType,
    instance: Instance | None,
    port: Port | None,
    rule: str,
) -> None:
    if instance is None or port is None:
        ctx.diagnostics.severe(
            DiagnosticCodes.M103_MISSING_PORT,
            f"Link end of '{connector.short_name}' has no instance or port",
            rule=rule,
            element=connector,
        )
        return

    component_type = ctx.component_of(port.owner, rule)
    prototype = ensure_component_prototype(composition, instance.name, component_type)
    target_port = ctx.registry.lookup(port)
    if isinstance(target_port, PPortPrototype):
        connector.provider = PPortInCompositionInstanceRef(
            context_component=prototype, target_p_port=target_port
        )
    elif isinstance(target_port, RPortPrototype):
        connector.requester = RPortInCompositionInstanceRef(
            context_component=prototype, target_r_port=target_port
        )
    else:
        ctx.diagnostics.severe(
            DiagnosticCodes.M103_MISSING_PORT,
            f"No port prototype registered for port '{port.name}' of '{instance.name}'",
            rule=rule,
            element=port,
        )
