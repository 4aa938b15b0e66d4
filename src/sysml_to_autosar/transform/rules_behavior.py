"""Enrichment rules for internal behaviors.

Covers runnables, RTE events and the per-instance data of a component: the
parts that live below an ``SwcInternalBehavior``.
"""

from __future__ import annotations

from sysml_to_autosar.source.graph import Attribute, Classifier, Event, Operation
from sysml_to_autosar.target.elements import (
    ApplicationSwComponentType,
    ClientServerOperation,
    NumericalValueSpecification,
    OperationInvokedEvent,
    ParameterDataPrototype,
    PerInstanceMemory,
    POperationInAtomicSwcInstanceRef,
    PPortPrototype,
    RunnableEntity,
    SwcInternalBehavior,
    SwDataDefProps,
    SwDataDefPropsConditional,
    TimingEvent,
    VariableDataPrototype,
)
from sysml_to_autosar.transform import conventions as cv
from sysml_to_autosar.transform.context import (
    TransformContext,
    ensure_internal_behavior,
    find_package_path,
)
from sysml_to_autosar.transform.diagnostics import DiagnosticCodes
from sysml_to_autosar.transform.resolution import (
    find_operation_impl_for_event,
    find_operation_with_event,
    find_providing_port,
    find_requiring_port,
    is_provided_operation_impl,
)

# =============================================================================
# Shared builders
# =============================================================================


def complete_runnable(runnable: RunnableEntity) -> RunnableEntity:
    """Set the symbol and the scheduling defaults of a runnable."""
    runnable.symbol = runnable.short_name
    runnable.can_be_invoked_concurrently = cv.RUNNABLE_CAN_BE_INVOKED_CONCURRENTLY
    runnable.minimum_start_interval = cv.RUNNABLE_MIN_START_INTERVAL
    return runnable


def create_runnable(name: str) -> RunnableEntity:
    """Create a completed runnable named ``name``."""
    return complete_runnable(RunnableEntity(short_name=name))


def create_sw_data_def_props() -> tuple[SwDataDefProps, SwDataDefPropsConditional]:
    """Create data definition properties with their single conditional variant."""
    conditional = SwDataDefPropsConditional()
    props = SwDataDefProps()
    props.conditionals.append(conditional)
    return props, conditional


def _rename(ctx: TransformContext, element: object, old: str, new: str, rule: str) -> None:
    ctx.diagnostics.info(
        DiagnosticCodes.I301_ELEMENT_RENAMED,
        f"Renamed '{old}' to '{new}'",
        rule=rule,
        element=element,
    )


# =============================================================================
# Component level
# =============================================================================


def add_swc_internal_behavior(ctx: TransformContext, component: ApplicationSwComponentType) -> None:
    """Give a component its internal behavior and attach its per-instance memories.

    Every «PIMProperty» attribute of the source block is looked up in the
    registry; attributes without a registered PerInstanceMemory are reported
    as warnings and skipped.
    """
    rule = "add_swc_internal_behavior"
    block = ctx.source_of(component, Classifier, rule)
    behavior = ensure_internal_behavior(component)
    if block is None:
        return

    for attribute in block.attributes:
        if not attribute.has_stereotype(cv.STEREOTYPE_PIM_PROPERTY):
            continue
        memory = ctx.registry.lookup_as(attribute, PerInstanceMemory)
        if memory is None:
            ctx.diagnostics.warning(
                DiagnosticCodes.D207_MISSING_PER_INSTANCE_MEMORY,
                f"No PerInstanceMemory found for attribute '{attribute.name}'",
                rule=rule,
                element=attribute,
            )
            continue
        if memory not in behavior.per_instance_memorys:
            behavior.per_instance_memorys.append(memory)


def set_runnable_entity_parent(ctx: TransformContext, runnable: RunnableEntity) -> None:
    """Attach an implementation runnable to its component's internal behavior.

    The operation must implement an operation of a provided or required
    interface of its owner. Implementations of provided operations are
    renamed ``<port>_<operation>``.
    """
    rule = "set_runnable_entity_parent"
    operation = ctx.source_of(runnable, Operation, rule)
    if operation is None:
        return

    port = find_providing_port(operation) or find_requiring_port(operation)
    if port is None:
        ctx.diagnostics.severe(
            DiagnosticCodes.M106_MISSING_PROVIDER,
            f"No interface found for operation '{operation.name}'",
            rule=rule,
            element=operation,
        )
        return

    if is_provided_operation_impl(operation):
        new_name = f"{port.name}_{operation.name}"
        if runnable.short_name != new_name:
            _rename(ctx, runnable, runnable.short_name, new_name, rule)
            runnable.short_name = new_name

    component = ctx.component_of(operation.owner, rule)
    if component is None:
        return
    behavior = ensure_internal_behavior(component)
    if runnable not in behavior.runnables:
        behavior.runnables.append(runnable)
    complete_runnable(runnable)


# =============================================================================
# RTE events
# =============================================================================


def set_timing_event_structure(ctx: TransformContext, timing_event: TimingEvent) -> None:
    """Wire a timing event created for a «periodic» operation.

    The event is prefixed ``TE_``, attached to the component's internal
    behavior and starts a new runnable named after the operation. The
    ``period`` tag is copied as a float; a missing or non-numeric period is
    reported and the event stays without one.
    """
    rule = "set_timing_event_structure"
    operation = ctx.source_of(timing_event, Operation, rule)
    if operation is None:
        return
    component = ctx.component_of(operation.owner, rule)
    if component is None:
        return

    behavior = ensure_internal_behavior(component)
    if not timing_event.short_name.startswith(cv.PREFIX_TIMING_EVENT):
        timing_event.short_name = cv.PREFIX_TIMING_EVENT + timing_event.short_name
    if timing_event not in behavior.events:
        behavior.events.append(timing_event)

    runnable = create_runnable(operation.name)
    behavior.runnables.append(runnable)
    timing_event.start_on_event = runnable

    period = operation.tag_value(cv.TAG_PERIOD)
    if period is None:
        ctx.diagnostics.warning(
            DiagnosticCodes.D201_MISSING_PERIOD,
            f"No value for '{cv.TAG_PERIOD}' in operation '{operation.name}'",
            rule=rule,
            element=operation,
        )
        return
    try:
        timing_event.period = float(period)
    except (TypeError, ValueError):
        ctx.diagnostics.warning(
            DiagnosticCodes.D202_INVALID_PERIOD,
            f"Period '{period}' of operation '{operation.name}' is not a number",
            rule=rule,
            element=operation,
        )


def set_operation_instance_ref(ctx: TransformContext, event_node: OperationInvokedEvent) -> None:
    """Wire an operation-invoked event to the component that serves it.

    The application components of ``SoftwareTypes/ComponentTypes`` are
    searched in order for one whose own ports provide the «operationWevent»
    operation tagged with the event. The first hit gets the event in its
    internal behavior; the event starts the runnable registered for the
    component operation implementing that interface operation.
    """
    rule = "set_operation_instance_ref"
    event = ctx.source_of(event_node, Event, rule)
    if event is None:
        return
    root = ctx.root_package(event)
    component_types = find_package_path(root, *cv.COMPONENT_TYPES_PATH) if root else None

    target_component: ApplicationSwComponentType | None = None
    block: Classifier | None = None
    if component_types is not None:
        for candidate in component_types.elements_of(ApplicationSwComponentType):
            source = ctx.registry.reverse_lookup(candidate)
            if not isinstance(source, Classifier):
                continue
            match = find_operation_with_event(event, provided=True, component=source)
            if match is None:
                continue
            operation = ctx.registry.lookup_as(match.operation, ClientServerOperation)
            if operation is None:
                ctx.diagnostics.severe(
                    DiagnosticCodes.M105_MISSING_OPERATION,
                    f"No ClientServerOperation registered for '{match.operation.name}'",
                    rule=rule,
                    element=event,
                )
                return
            port = ctx.registry.lookup_as(match.port, PPortPrototype)
            if port is None:
                ctx.diagnostics.severe(
                    DiagnosticCodes.M103_MISSING_PORT,
                    f"No PPortPrototype registered for port '{match.port.name}'",
                    rule=rule,
                    element=event,
                )
                return
            event_node.operation = POperationInAtomicSwcInstanceRef(
                context_p_port=port, target_provided_operation=operation
            )
            target_component = candidate
            block = source
            break

    if target_component is None or block is None:
        ctx.diagnostics.severe(
            DiagnosticCodes.M104_MISSING_COMPONENT,
            f"ApplicationSwComponentType not found for event '{event.name}'",
            rule=rule,
            element=event,
        )
        return

    behavior = ensure_internal_behavior(target_component)
    if event_node not in behavior.events:
        behavior.events.append(event_node)

    implementation = find_operation_impl_for_event(
        event, provided=True, component=block, diagnostics=ctx.diagnostics
    )
    runnable = ctx.registry.lookup_as(implementation, RunnableEntity)
    if runnable is None:
        ctx.diagnostics.warning(
            DiagnosticCodes.D204_MISSING_RUNNABLE,
            f"No runnable registered for the implementation of event '{event.name}'",
            rule=rule,
            element=event,
        )
        return
    event_node.start_on_event = runnable


# =============================================================================
# Per-instance data
# =============================================================================


def _owning_behavior(
    ctx: TransformContext, attribute: Attribute, rule: str
) -> SwcInternalBehavior | None:
    component = ctx.component_of(attribute.owner, rule)
    if component is None:
        return None
    return ensure_internal_behavior(component)


def add_per_instance_memory(ctx: TransformContext, memory: PerInstanceMemory) -> None:
    """Rename a per-instance memory ``<attr>_NV`` and type it through its data props."""
    rule = "add_per_instance_memory"
    attribute = ctx.source_of(memory, Attribute, rule)
    if attribute is None:
        return
    behavior = _owning_behavior(ctx, attribute, rule)
    if behavior is None:
        return

    if not memory.short_name.endswith(cv.SUFFIX_PER_INSTANCE_MEMORY):
        memory.short_name += cv.SUFFIX_PER_INSTANCE_MEMORY
    if memory not in behavior.per_instance_memorys:
        behavior.per_instance_memorys.append(memory)

    props, conditional = create_sw_data_def_props()
    memory.sw_data_def_props = props
    conditional.value_axis_data_type = ctx.data_type_of(attribute.type, rule, attribute)


def change_calibration_structure(ctx: TransformContext, parameter: ParameterDataPrototype) -> None:
    """Turn a «CalibrationProperty» attribute into a per-instance parameter ``<attr>_C``."""
    rule = "change_calibration_structure"
    attribute = ctx.source_of(parameter, Attribute, rule)
    if attribute is None:
        return
    behavior = _owning_behavior(ctx, attribute, rule)
    if behavior is None:
        return

    if not parameter.short_name.endswith(cv.SUFFIX_CALIBRATION):
        parameter.short_name += cv.SUFFIX_CALIBRATION
    if parameter not in behavior.per_instance_parameters:
        behavior.per_instance_parameters.append(parameter)

    props, _ = create_sw_data_def_props()
    parameter.sw_data_def_props = props
    parameter.init_value = NumericalValueSpecification(
        short_label=cv.INIT_VALUE_LABEL, value=cv.INIT_VALUE
    )
    parameter.type = ctx.data_type_of(attribute.type, rule, attribute)


def set_inter_runnable_variable_parent(
    ctx: TransformContext, variable: VariableDataPrototype
) -> None:
    """Attach a static attribute's variable as an explicit inter-runnable variable."""
    rule = "set_inter_runnable_variable_parent"
    attribute = ctx.source_of(variable, Attribute, rule)
    if attribute is None:
        return
    behavior = _owning_behavior(ctx, attribute, rule)
    if behavior is None:
        return
    if variable not in behavior.explicit_inter_runnable_variables:
        behavior.explicit_inter_runnable_variables.append(variable)
    variable.type = ctx.data_type_of(attribute.type, rule, attribute)
