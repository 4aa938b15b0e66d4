"""Main source graph to AUTOSAR transformer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from sysml_to_autosar.source.graph import (
    Attribute,
    Classifier,
    Event,
    EventReception,
    Operation,
    Package,
    SourceElement,
    SourceModel,
)
from sysml_to_autosar.target.base import ARElement
from sysml_to_autosar.target.elements import (
    ApplicationPrimitiveDataType,
    ApplicationSwComponentType,
    ArgumentDataPrototype,
    ARPackage,
    AssemblySwConnector,
    ClientServerInterface,
    ClientServerOperation,
    ImplementationDataType,
    OperationInvokedEvent,
    ParameterDataPrototype,
    PerInstanceMemory,
    PPortPrototype,
    RPortPrototype,
    RunnableEntity,
    SenderReceiverInterface,
    TimingEvent,
    VariableDataPrototype,
)
from sysml_to_autosar.target.model import ARModel
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.transform.context import (
    TransformContext,
    application_data_types_package,
    component_types_package,
    ensure_composition,
    ensure_sender_receiver_holder,
    implementation_data_types_package,
    interfaces_package,
)
from sysml_to_autosar.transform.diagnostics import DiagnosticCodes, DiagnosticLog
from sysml_to_autosar.transform.predicates import (
    InterfaceKind,
    PortRole,
    classify_interface,
    classify_port,
    is_client_server_argument,
    is_event_for_operation_with_event,
    is_operation_with_data,
    is_periodic_operation,
    is_reception_for_data_element,
    is_sender_receiver_argument,
    is_static_attribute,
    is_used_in_link,
    port_interface,
)
from sysml_to_autosar.transform.registry import CorrespondenceRegistry
from sysml_to_autosar.transform.resolution import (
    find_all_operation_matches,
    find_all_operations_with_event,
)
from sysml_to_autosar.transform.rules_behavior import (
    add_per_instance_memory,
    add_swc_internal_behavior,
    change_calibration_structure,
    set_inter_runnable_variable_parent,
    set_operation_instance_ref,
    set_runnable_entity_parent,
    set_timing_event_structure,
)
from sysml_to_autosar.transform.rules_composition import add_assembly_connector_structure
from sysml_to_autosar.transform.rules_data import (
    add_app_data_type_structure,
    add_argument_type,
    add_event_parameters,
    change_data_prototype_name_and_set_type,
)
from sysml_to_autosar.transform.rules_ports import add_pport_structure, add_rport_structure

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=ARElement)
Rule = Callable[[TransformContext, Any], None]


class TransformFailedError(Exception):
    """Strict transformation finished with severe diagnostics."""

    def __init__(self, result: TransformResult) -> None:
        """Initialize TransformFailedError.

        Args:
        ----
            result: The complete, partially transformed result.

        """
        self.result = result
        count = len(result.diagnostics.severe_records)
        super().__init__(f"Transformation failed with {count} severe diagnostic(s)")


@dataclass
class TransformResult:
    """Output of one transformation pass."""

    model: ARModel
    registry: CorrespondenceRegistry
    diagnostics: DiagnosticLog

    @property
    def success(self) -> bool:
        """True if no severe diagnostic was recorded."""
        return not self.diagnostics.has_severe


class SysmlToAutosarTransformer:
    """Transform a source graph into an AUTOSAR target graph.

    Source elements are visited phase by phase. For each eligible element the
    transformer creates the bare target node, registers the correspondence
    and runs the matching enrichment rule. Rules never raise: an unexpected
    exception inside one is recorded as a severe diagnostic and the pass
    continues with the next element.

    Usage:
        transformer = SysmlToAutosarTransformer()
        result = transformer.transform(source_model)
        result.model  # -> ARModel
    """

    def __init__(self, strict: bool = False) -> None:
        """Initialize the transformer.

        Args:
        ----
            strict: Raise TransformFailedError when the pass records a
                severe diagnostic.

        """
        self.strict = strict

    def transform(self, source: SourceModel) -> TransformResult:
        """Transform a SourceModel to an ARModel.

        Args:
        ----
            source: Source graph built from a validated document.

        Returns:
        -------
            TransformResult with the target model, the registry and the
            diagnostics of the pass.

        Raises:
        ------
            TransformFailedError: In strict mode, if any diagnostic is severe.

        """
        ctx = TransformContext(model=ARModel(name=source.name))

        # Root packages first: every locator below resolves through them
        self._process_packages(source, ctx)

        for package in source.packages:
            self._process_types(package, ctx)
        for package in source.packages:
            self._process_interfaces(package, ctx)
        for package in source.packages:
            self._process_components(package, ctx)
        for package in source.packages:
            self._process_events(package, ctx)
        for package in source.packages:
            self._process_port_wiring(package, ctx)
        for package in source.packages:
            self._process_links(package, ctx)

        result = TransformResult(ctx.model, ctx.registry, ctx.diagnostics)
        logger.info(
            "Transformed '%s': %d correspondences, %d warnings, %d severe",
            source.name,
            len(ctx.registry),
            len(ctx.diagnostics.warnings),
            len(ctx.diagnostics.severe_records),
        )
        if self.strict and not result.success:
            raise TransformFailedError(result)
        return result

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _create(self, ctx: TransformContext, cls: type[E], source: SourceElement) -> E:
        """Create a bare node named after ``source`` and register the pair."""
        node = ctx.model.create(cls, source.name)
        ctx.registry.register(source, node)
        ctx.diagnostics.info(
            DiagnosticCodes.I300_ELEMENT_CREATED,
            f"Created {cls.__name__} '{node.short_name}'",
            element=source,
        )
        return node

    def _apply(self, ctx: TransformContext, rule: Rule, target: ARElement) -> None:
        """Run one enrichment rule in isolation.

        The node is flagged in progress while the rule runs; the flag stays
        set if the rule fails.
        """
        target.in_progress = True
        try:
            rule(ctx, target)
        except Exception as exc:
            logger.debug("Rule %s failed", rule.__name__, exc_info=True)
            ctx.diagnostics.severe(
                DiagnosticCodes.S900_RULE_FAILED,
                f"Rule failed on '{target.short_name}': {exc}",
                rule=rule.__name__,
                element=target,
            )
            return
        target.in_progress = False

    def _skip(self, ctx: TransformContext, element: SourceElement, reason: str) -> None:
        ctx.diagnostics.info(
            DiagnosticCodes.I302_ELEMENT_SKIPPED,
            f"Skipped '{element.name}': {reason}",
            element=element,
        )

    def _require_package(
        self, ctx: TransformContext, package: ARPackage | None, element: SourceElement
    ) -> bool:
        if package is None:
            ctx.diagnostics.severe(
                DiagnosticCodes.M100_UNREGISTERED_ELEMENT,
                f"No ARPackage registered for the package of '{element.name}'",
                element=element,
            )
            return False
        return True

    # -------------------------------------------------------------------------
    # Phases
    # -------------------------------------------------------------------------

    def _process_packages(self, source: SourceModel, ctx: TransformContext) -> None:
        """Process source packages into root AR packages."""
        for package in source.packages:
            ar_package = self._create(ctx, ARPackage, package)
            ctx.model.add_package(ar_package)

    def _process_types(self, package: Package, ctx: TransformContext) -> None:
        """Process data types.

        Enumerations and typedefs become application primitive data types,
        primitives become implementation data types.
        """
        for data_type in package.data_types:
            if data_type.is_enumeration or data_type.is_typedef:
                container = application_data_types_package(ctx, data_type)
                if not self._require_package(ctx, container, data_type):
                    continue
                app_type = self._create(ctx, ApplicationPrimitiveDataType, data_type)
                container.elements.append(app_type)
                self._apply(ctx, add_app_data_type_structure, app_type)
            else:
                container = implementation_data_types_package(ctx, data_type)
                if not self._require_package(ctx, container, data_type):
                    continue
                impl_type = self._create(ctx, ImplementationDataType, data_type)
                impl_type.category = cv.IMPL_DATA_TYPE_CATEGORY
                container.elements.append(impl_type)

    def _process_interfaces(self, package: Package, ctx: TransformContext) -> None:
        """Process interfaces into sender-receiver or client-server interfaces."""
        for interface in package.interfaces:
            kind = classify_interface(interface, ctx.diagnostics)
            if kind is InterfaceKind.NONE:
                ctx.diagnostics.warning(
                    DiagnosticCodes.C003_UNCLASSIFIED_INTERFACE,
                    f"Interface '{interface.name}' is neither sender-receiver nor client-server",
                    element=interface,
                )
                continue
            container = interfaces_package(ctx, interface)
            if not self._require_package(ctx, container, interface):
                continue
            if kind is InterfaceKind.SENDER_RECEIVER:
                self._process_sender_receiver_interface(interface, container, ctx)
            else:
                self._process_client_server_interface(interface, container, ctx)

    def _process_sender_receiver_interface(
        self, interface: Classifier, container: ARPackage, ctx: TransformContext
    ) -> None:
        target = self._create(ctx, SenderReceiverInterface, interface)
        container.elements.append(target)

        for item in interface.interface_items:
            if is_operation_with_data(item):
                data_element = self._create(ctx, VariableDataPrototype, item)
                target.data_elements.append(data_element)
                self._apply(ctx, change_data_prototype_name_and_set_type, data_element)
                self._process_sender_receiver_arguments(item, interface.name, ctx)
            elif isinstance(item, EventReception):
                if not is_reception_for_data_element(item):
                    self._skip(ctx, item, "its event triggers an «operationWevent» operation")
                    continue
                data_element = self._create(ctx, VariableDataPrototype, item)
                self._apply(ctx, add_event_parameters, data_element)

    def _process_sender_receiver_arguments(
        self,
        owner: Operation | Event,
        holder_name: str,
        ctx: TransformContext,
    ) -> None:
        """Arguments become data prototypes kept in the ``SRI_<holder>`` interface.

        The receiver port rule moves them into the interface of the port
        that reads them.
        """
        for argument in owner.arguments:
            if argument in ctx.registry or not is_sender_receiver_argument(argument):
                continue
            container = interfaces_package(ctx, owner)
            if not self._require_package(ctx, container, owner):
                return
            holder = ensure_sender_receiver_holder(container, holder_name)
            prototype = self._create(ctx, VariableDataPrototype, argument)
            holder.data_elements.append(prototype)
            self._apply(ctx, add_argument_type, prototype)

    def _process_client_server_interface(
        self, interface: Classifier, container: ARPackage, ctx: TransformContext
    ) -> None:
        target = self._create(ctx, ClientServerInterface, interface)
        container.elements.append(target)

        for operation in interface.operations:
            cs_operation = self._create(ctx, ClientServerOperation, operation)
            target.operations.append(cs_operation)
            for argument in operation.arguments:
                if not is_client_server_argument(argument):
                    continue
                prototype = self._create(ctx, ArgumentDataPrototype, argument)
                cs_operation.arguments.append(prototype)
                self._apply(ctx, add_argument_type, prototype)

    def _process_components(self, package: Package, ctx: TransformContext) -> None:
        """Process software components with their attributes, operations and ports."""
        for block in package.software_components:
            container = component_types_package(ctx, block)
            if not self._require_package(ctx, container, block):
                continue
            component = self._create(ctx, ApplicationSwComponentType, block)
            container.elements.append(component)

            created = [self._create_attribute(attribute, ctx) for attribute in block.attributes]
            self._apply(ctx, add_swc_internal_behavior, component)
            for node in created:
                if isinstance(node, PerInstanceMemory):
                    self._apply(ctx, add_per_instance_memory, node)
                elif isinstance(node, ParameterDataPrototype):
                    self._apply(ctx, change_calibration_structure, node)
                elif isinstance(node, VariableDataPrototype):
                    self._apply(ctx, set_inter_runnable_variable_parent, node)

            for operation in block.operations:
                self._process_component_operation(operation, ctx)

            for port in block.ports:
                role = classify_port(port, ctx.diagnostics)
                if role is PortRole.PROVIDED:
                    component.ports.append(self._create(ctx, PPortPrototype, port))
                elif role is PortRole.REQUIRED:
                    component.ports.append(self._create(ctx, RPortPrototype, port))
                elif port_interface(port) is not None:
                    ctx.diagnostics.warning(
                        DiagnosticCodes.C004_UNSUPPORTED_PORT_INTERFACE,
                        f"Port '{port.name}' uses an interface that is neither "
                        "sender-receiver nor client-server",
                        element=port,
                    )

    def _create_attribute(
        self, attribute: Attribute, ctx: TransformContext
    ) -> ARElement | None:
        if not is_static_attribute(attribute):
            self._skip(ctx, attribute, "not a static attribute of a software component")
            return None
        if attribute.has_stereotype(cv.STEREOTYPE_PIM_PROPERTY):
            return self._create(ctx, PerInstanceMemory, attribute)
        if attribute.has_stereotype(cv.STEREOTYPE_CALIBRATION_PROPERTY):
            return self._create(ctx, ParameterDataPrototype, attribute)
        return self._create(ctx, VariableDataPrototype, attribute)

    def _process_component_operation(self, operation: Operation, ctx: TransformContext) -> None:
        if is_periodic_operation(operation):
            timing_event = self._create(ctx, TimingEvent, operation)
            self._apply(ctx, set_timing_event_structure, timing_event)
            return

        matches = find_all_operation_matches(operation, provided=True)
        if not matches:
            matches = find_all_operation_matches(operation, provided=False)
        if len(matches) > 1:
            candidates = ", ".join(f"{m.port.name}.{m.operation.name}" for m in matches)
            ctx.diagnostics.warning(
                DiagnosticCodes.D206_AMBIGUOUS_MATCH,
                f"Operation '{operation.name}' matches several interface operations "
                f"({candidates}); using the first",
                element=operation,
            )
        runnable = self._create(ctx, RunnableEntity, operation)
        self._apply(ctx, set_runnable_entity_parent, runnable)

    def _process_events(self, package: Package, ctx: TransformContext) -> None:
        """Process events: data arguments and operation-invoked events."""
        for event in package.events:
            self._process_sender_receiver_arguments(event, event.name, ctx)

            if not is_event_for_operation_with_event(event):
                continue
            matches = find_all_operations_with_event(event, provided=True)
            if len(matches) > 1:
                candidates = ", ".join(
                    f"{m.component.name if m.component else '?'}.{m.port.name}" for m in matches
                )
                ctx.diagnostics.warning(
                    DiagnosticCodes.D206_AMBIGUOUS_MATCH,
                    f"Event '{event.name}' triggers several operations ({candidates}); "
                    "using the first",
                    element=event,
                )
            event_node = self._create(ctx, OperationInvokedEvent, event)
            self._apply(ctx, set_operation_instance_ref, event_node)

    def _process_port_wiring(self, package: Package, ctx: TransformContext) -> None:
        """Run the port rules once every interface, component and event exists."""
        for block in package.software_components:
            for port in block.ports:
                node = ctx.registry.lookup(port)
                if isinstance(node, PPortPrototype):
                    self._apply(ctx, add_pport_structure, node)
                elif isinstance(node, RPortPrototype):
                    self._apply(ctx, add_rport_structure, node)

    def _process_links(self, package: Package, ctx: TransformContext) -> None:
        """Process links into assembly connectors inside ``<Block>_Cmpstn`` compositions."""
        for instance in package.instances:
            if not is_used_in_link(instance):
                self._skip(ctx, instance, "not an endpoint of any link")

        for link in package.links:
            connector = self._create(ctx, AssemblySwConnector, link)
            composition = ensure_composition(ctx, connector)
            if composition is None:
                ctx.diagnostics.severe(
                    DiagnosticCodes.M104_MISSING_COMPONENT,
                    f"No component type registered for the from-port owner of link '{link.name}'",
                    element=link,
                )
                continue
            composition.connectors.append(connector)
            self._apply(ctx, add_assembly_connector_structure, connector)
