"""Target node kinds (AUTOSAR-like software component description)."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar

from sysml_to_autosar.target.base import (
    ARElement,
    ARKind,
    attribute,
    contained,
    contained_list,
    reference,
)


@dataclass(frozen=True)
class Limit:
    """A limit value for compu scales.

    Attributes
    ----------
        value: The limit value.
        interval_type: OPEN, CLOSED, or INFINITE.

    """

    value: float | int
    interval_type: str = "CLOSED"


# =============================================================================
# Packages
# =============================================================================


@dataclass(eq=False)
class ARPackage(ARElement):
    """A package holding elements and sub-packages."""

    elements: list[ARElement] = contained_list("ELEMENTS")
    ar_packages: list[ARPackage] = contained_list("AR-PACKAGES")

    KIND: ClassVar[ARKind] = ARKind.AR_PACKAGE

    def find_package(self, name: str) -> ARPackage | None:
        """Find a direct sub-package by short name."""
        return next((p for p in self.ar_packages if p.short_name == name), None)

    def find_element(self, name: str, cls: type[ARElement] | None = None) -> ARElement | None:
        """Find a direct element by short name, optionally restricted to a class."""
        for element in self.elements:
            if element.short_name == name and (cls is None or isinstance(element, cls)):
                return element
        return None

    def elements_of(self, cls: type[ARElement]) -> Iterator[ARElement]:
        """Direct elements that are instances of ``cls``."""
        return (e for e in self.elements if isinstance(e, cls))


# =============================================================================
# Data types
# =============================================================================


@dataclass(eq=False)
class Unit(ARElement):
    """A physical unit."""

    display_name: str | None = attribute("DISPLAY-NAME")

    KIND: ClassVar[ARKind] = ARKind.UNIT


@dataclass(eq=False)
class CompuScale(ARElement):
    """One scale of a compute method; for text tables a single literal."""

    short_label: str | None = attribute("SHORT-LABEL")
    lower_limit: Limit | None = attribute("LOWER-LIMIT")
    upper_limit: Limit | None = attribute("UPPER-LIMIT")
    vt: str | None = attribute("COMPU-CONST/VT")

    KIND: ClassVar[ARKind] = ARKind.COMPU_SCALE
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class CompuMethod(ARElement):
    """Conversion between internal and physical values."""

    category: str | None = attribute("CATEGORY")
    unit: Unit | None = reference("UNIT-REF")
    compu_scales: list[CompuScale] = contained_list("COMPU-INTERNAL-TO-PHYS/COMPU-SCALES")

    KIND: ClassVar[ARKind] = ARKind.COMPU_METHOD


@dataclass(eq=False)
class ImplementationDataType(ARElement):
    """Implementation (platform) data type."""

    category: str | None = attribute("CATEGORY")

    KIND: ClassVar[ARKind] = ARKind.IMPLEMENTATION_DATA_TYPE


@dataclass(eq=False)
class SwDataDefPropsConditional(ARElement):
    """One variant of data definition properties."""

    compu_method: CompuMethod | None = reference("COMPU-METHOD-REF")
    implementation_data_type: ImplementationDataType | None = reference(
        "IMPLEMENTATION-DATA-TYPE-REF"
    )
    unit: Unit | None = reference("UNIT-REF")
    value_axis_data_type: DataType | None = reference("VALUE-AXIS-DATA-TYPE-REF")

    KIND: ClassVar[ARKind] = ARKind.SW_DATA_DEF_PROPS_CONDITIONAL
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class SwDataDefProps(ARElement):
    """Data definition properties with their variants."""

    conditionals: list[SwDataDefPropsConditional] = contained_list("SW-DATA-DEF-PROPS-VARIANTS")

    KIND: ClassVar[ARKind] = ARKind.SW_DATA_DEF_PROPS
    REFERRABLE: ClassVar[bool] = False

    @property
    def conditional(self) -> SwDataDefPropsConditional | None:
        """The first variant, which carries the effective properties."""
        return self.conditionals[0] if self.conditionals else None


@dataclass(eq=False)
class ApplicationPrimitiveDataType(ARElement):
    """Application-level primitive data type."""

    category: str | None = attribute("CATEGORY")
    sw_data_def_props: SwDataDefProps | None = contained("SW-DATA-DEF-PROPS")

    KIND: ClassVar[ARKind] = ARKind.APPLICATION_PRIMITIVE_DATA_TYPE


DataType = ApplicationPrimitiveDataType | ImplementationDataType


@dataclass(eq=False)
class NumericalValueSpecification(ARElement):
    """A numeric initial value."""

    short_label: str | None = attribute("SHORT-LABEL")
    value: float | None = attribute("VALUE")

    KIND: ClassVar[ARKind] = ARKind.NUMERICAL_VALUE_SPECIFICATION
    REFERRABLE: ClassVar[bool] = False


# =============================================================================
# Interfaces
# =============================================================================


@dataclass(eq=False)
class VariableDataPrototype(ARElement):
    """A data element of a sender-receiver interface or an inter-runnable variable."""

    type: DataType | None = reference("TYPE-TREF")

    KIND: ClassVar[ARKind] = ARKind.VARIABLE_DATA_PROTOTYPE


@dataclass(eq=False)
class ParameterDataPrototype(ARElement):
    """A calibration parameter."""

    sw_data_def_props: SwDataDefProps | None = contained("SW-DATA-DEF-PROPS")
    type: DataType | None = reference("TYPE-TREF")
    init_value: NumericalValueSpecification | None = contained("INIT-VALUE", wrap=True)

    KIND: ClassVar[ARKind] = ARKind.PARAMETER_DATA_PROTOTYPE


@dataclass(eq=False)
class ArgumentDataPrototype(ARElement):
    """An argument of a client-server operation."""

    type: DataType | None = reference("TYPE-TREF")

    KIND: ClassVar[ARKind] = ARKind.ARGUMENT_DATA_PROTOTYPE


@dataclass(eq=False)
class ClientServerOperation(ARElement):
    """An operation of a client-server interface."""

    arguments: list[ArgumentDataPrototype] = contained_list("ARGUMENTS")

    KIND: ClassVar[ARKind] = ARKind.CLIENT_SERVER_OPERATION


@dataclass(eq=False)
class SenderReceiverInterface(ARElement):
    """Interface made of data elements."""

    data_elements: list[VariableDataPrototype] = contained_list("DATA-ELEMENTS")

    KIND: ClassVar[ARKind] = ARKind.SENDER_RECEIVER_INTERFACE


@dataclass(eq=False)
class ClientServerInterface(ARElement):
    """Interface made of operations."""

    operations: list[ClientServerOperation] = contained_list("OPERATIONS")

    KIND: ClassVar[ARKind] = ARKind.CLIENT_SERVER_INTERFACE


PortInterface = SenderReceiverInterface | ClientServerInterface


# =============================================================================
# Communication specifications
# =============================================================================


@dataclass(eq=False)
class NonqueuedSenderComSpec(ARElement):
    """Sender side of a data element."""

    data_element: VariableDataPrototype | None = reference("DATA-ELEMENT-REF")
    init_value: NumericalValueSpecification | None = contained("INIT-VALUE", wrap=True)

    KIND: ClassVar[ARKind] = ARKind.NONQUEUED_SENDER_COM_SPEC
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class NonqueuedReceiverComSpec(ARElement):
    """Receiver side of a data element."""

    data_element: VariableDataPrototype | None = reference("DATA-ELEMENT-REF")
    init_value: NumericalValueSpecification | None = contained("INIT-VALUE", wrap=True)

    KIND: ClassVar[ARKind] = ARKind.NONQUEUED_RECEIVER_COM_SPEC
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class ServerComSpec(ARElement):
    """Server side of an operation."""

    operation: ClientServerOperation | None = reference("OPERATION-REF")

    KIND: ClassVar[ARKind] = ARKind.SERVER_COM_SPEC
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class ClientComSpec(ARElement):
    """Client side of an operation."""

    operation: ClientServerOperation | None = reference("OPERATION-REF")

    KIND: ClassVar[ARKind] = ARKind.CLIENT_COM_SPEC
    REFERRABLE: ClassVar[bool] = False


ComSpec = NonqueuedSenderComSpec | NonqueuedReceiverComSpec | ServerComSpec | ClientComSpec


# =============================================================================
# Ports
# =============================================================================


@dataclass(eq=False)
class PPortPrototype(ARElement):
    """Provided port."""

    provided_com_specs: list[ComSpec] = contained_list("PROVIDED-COM-SPECS")
    provided_interface: PortInterface | None = reference("PROVIDED-INTERFACE-TREF")

    KIND: ClassVar[ARKind] = ARKind.P_PORT_PROTOTYPE

    @property
    def port_interface(self) -> PortInterface | None:
        return self.provided_interface

    @property
    def com_specs(self) -> list[ComSpec]:
        return self.provided_com_specs


@dataclass(eq=False)
class RPortPrototype(ARElement):
    """Required port."""

    required_com_specs: list[ComSpec] = contained_list("REQUIRED-COM-SPECS")
    required_interface: PortInterface | None = reference("REQUIRED-INTERFACE-TREF")

    KIND: ClassVar[ARKind] = ARKind.R_PORT_PROTOTYPE

    @property
    def port_interface(self) -> PortInterface | None:
        return self.required_interface

    @property
    def com_specs(self) -> list[ComSpec]:
        return self.required_com_specs


PortPrototype = PPortPrototype | RPortPrototype


# =============================================================================
# Instance references
# =============================================================================


@dataclass(eq=False)
class VariableInAtomicSwcTypeInstanceRef(ARElement):
    """Port plus data element seen from inside a component type."""

    port_prototype: PortPrototype | None = reference("PORT-PROTOTYPE-REF")
    target_data_prototype: VariableDataPrototype | None = reference("TARGET-DATA-PROTOTYPE-REF")

    KIND: ClassVar[ARKind] = ARKind.VARIABLE_IN_ATOMIC_SWC_TYPE_INSTANCE_REF
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class AutosarVariableRef(ARElement):
    """Variable accessed by a variable access: through a port or local."""

    autosar_variable: VariableInAtomicSwcTypeInstanceRef | None = contained(
        "AUTOSAR-VARIABLE-IREF"
    )
    local_variable: VariableDataPrototype | None = reference("LOCAL-VARIABLE-REF")

    KIND: ClassVar[ARKind] = ARKind.AUTOSAR_VARIABLE_REF
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class RVariableInAtomicSwcInstanceRef(ARElement):
    """Required port plus data element triggering a data received event."""

    context_r_port: RPortPrototype | None = reference("CONTEXT-R-PORT-REF")
    target_data_element: VariableDataPrototype | None = reference("TARGET-DATA-ELEMENT-REF")

    KIND: ClassVar[ARKind] = ARKind.R_VARIABLE_IN_ATOMIC_SWC_INSTANCE_REF
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class ROperationInAtomicSwcInstanceRef(ARElement):
    """Required port plus operation called by a server call point."""

    context_r_port: RPortPrototype | None = reference("CONTEXT-R-PORT-REF")
    target_required_operation: ClientServerOperation | None = reference(
        "TARGET-REQUIRED-OPERATION-REF"
    )

    KIND: ClassVar[ARKind] = ARKind.R_OPERATION_IN_ATOMIC_SWC_INSTANCE_REF
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class POperationInAtomicSwcInstanceRef(ARElement):
    """Provided port plus operation triggering an operation invoked event."""

    context_p_port: PPortPrototype | None = reference("CONTEXT-P-PORT-REF")
    target_provided_operation: ClientServerOperation | None = reference(
        "TARGET-PROVIDED-OPERATION-REF"
    )

    KIND: ClassVar[ARKind] = ARKind.P_OPERATION_IN_ATOMIC_SWC_INSTANCE_REF
    REFERRABLE: ClassVar[bool] = False


# =============================================================================
# Internal behavior
# =============================================================================


@dataclass(eq=False)
class VariableAccess(ARElement):
    """Read or write access of a runnable to a variable."""

    accessed_variable: AutosarVariableRef | None = contained("ACCESSED-VARIABLE")

    KIND: ClassVar[ARKind] = ARKind.VARIABLE_ACCESS


@dataclass(eq=False)
class SynchronousServerCallPoint(ARElement):
    """Synchronous call of a required operation."""

    operation: ROperationInAtomicSwcInstanceRef | None = contained("OPERATION-IREF")
    timeout: float | None = attribute("TIMEOUT")

    KIND: ClassVar[ARKind] = ARKind.SYNCHRONOUS_SERVER_CALL_POINT


@dataclass(eq=False)
class RunnableEntity(ARElement):
    """A schedulable piece of component code."""

    minimum_start_interval: float | None = attribute("MINIMUM-START-INTERVAL")
    can_be_invoked_concurrently: bool | None = attribute("CAN-BE-INVOKED-CONCURRENTLY")
    data_read_accesses: list[VariableAccess] = contained_list("DATA-READ-ACCESSS")
    data_send_points: list[VariableAccess] = contained_list("DATA-SEND-POINTS")
    server_call_points: list[SynchronousServerCallPoint] = contained_list("SERVER-CALL-POINTS")
    symbol: str | None = attribute("SYMBOL")

    KIND: ClassVar[ARKind] = ARKind.RUNNABLE_ENTITY


@dataclass(eq=False)
class DataReceivedEvent(ARElement):
    """Event raised when a data element is received."""

    start_on_event: RunnableEntity | None = reference("START-ON-EVENT-REF")
    data: RVariableInAtomicSwcInstanceRef | None = contained("DATA-IREF")

    KIND: ClassVar[ARKind] = ARKind.DATA_RECEIVED_EVENT


@dataclass(eq=False)
class TimingEvent(ARElement):
    """Periodic event."""

    start_on_event: RunnableEntity | None = reference("START-ON-EVENT-REF")
    period: float | None = attribute("PERIOD")

    KIND: ClassVar[ARKind] = ARKind.TIMING_EVENT


@dataclass(eq=False)
class OperationInvokedEvent(ARElement):
    """Event raised when a provided operation is invoked."""

    start_on_event: RunnableEntity | None = reference("START-ON-EVENT-REF")
    operation: POperationInAtomicSwcInstanceRef | None = contained("OPERATION-IREF")

    KIND: ClassVar[ARKind] = ARKind.OPERATION_INVOKED_EVENT


RTEEvent = DataReceivedEvent | TimingEvent | OperationInvokedEvent


@dataclass(eq=False)
class PerInstanceMemory(ARElement):
    """Per-instance memory of a component."""

    sw_data_def_props: SwDataDefProps | None = contained("SW-DATA-DEF-PROPS")

    KIND: ClassVar[ARKind] = ARKind.PER_INSTANCE_MEMORY


@dataclass(eq=False)
class SwcInternalBehavior(ARElement):
    """Internal behavior of an atomic component."""

    events: list[RTEEvent] = contained_list("EVENTS")
    explicit_inter_runnable_variables: list[VariableDataPrototype] = contained_list(
        "EXPLICIT-INTER-RUNNABLE-VARIABLES"
    )
    per_instance_memorys: list[PerInstanceMemory] = contained_list("PER-INSTANCE-MEMORYS")
    per_instance_parameters: list[ParameterDataPrototype] = contained_list(
        "PER-INSTANCE-PARAMETERS"
    )
    runnables: list[RunnableEntity] = contained_list("RUNNABLES")
    supports_multiple_instantiation: bool = attribute("SUPPORTS-MULTIPLE-INSTANTIATION", False)

    KIND: ClassVar[ARKind] = ARKind.SWC_INTERNAL_BEHAVIOR

    def find_runnable(self, name: str) -> RunnableEntity | None:
        return next((r for r in self.runnables if r.short_name == name), None)


# =============================================================================
# Components
# =============================================================================


@dataclass(eq=False)
class ApplicationSwComponentType(ARElement):
    """Atomic application component."""

    ports: list[PortPrototype] = contained_list("PORTS")
    internal_behaviors: list[SwcInternalBehavior] = contained_list("INTERNAL-BEHAVIORS")

    KIND: ClassVar[ARKind] = ARKind.APPLICATION_SW_COMPONENT_TYPE

    @property
    def internal_behavior(self) -> SwcInternalBehavior | None:
        return self.internal_behaviors[0] if self.internal_behaviors else None


@dataclass(eq=False)
class SwComponentPrototype(ARElement):
    """A component instance inside a composition."""

    type: ApplicationSwComponentType | None = reference("TYPE-TREF")

    KIND: ClassVar[ARKind] = ARKind.SW_COMPONENT_PROTOTYPE


@dataclass(eq=False)
class PPortInCompositionInstanceRef(ARElement):
    """Provided port of a component prototype."""

    context_component: SwComponentPrototype | None = reference("CONTEXT-COMPONENT-REF")
    target_p_port: PPortPrototype | None = reference("TARGET-P-PORT-REF")

    KIND: ClassVar[ARKind] = ARKind.P_PORT_IN_COMPOSITION_INSTANCE_REF
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class RPortInCompositionInstanceRef(ARElement):
    """Required port of a component prototype."""

    context_component: SwComponentPrototype | None = reference("CONTEXT-COMPONENT-REF")
    target_r_port: RPortPrototype | None = reference("TARGET-R-PORT-REF")

    KIND: ClassVar[ARKind] = ARKind.R_PORT_IN_COMPOSITION_INSTANCE_REF
    REFERRABLE: ClassVar[bool] = False


@dataclass(eq=False)
class AssemblySwConnector(ARElement):
    """Connects a provided port to a required port of two prototypes."""

    provider: PPortInCompositionInstanceRef | None = contained("PROVIDER-IREF")
    requester: RPortInCompositionInstanceRef | None = contained("REQUESTER-IREF")

    KIND: ClassVar[ARKind] = ARKind.ASSEMBLY_SW_CONNECTOR


@dataclass(eq=False)
class CompositionSwComponentType(ARElement):
    """Composition of component prototypes and connectors."""

    components: list[SwComponentPrototype] = contained_list("COMPONENTS")
    connectors: list[AssemblySwConnector] = contained_list("CONNECTORS")

    KIND: ClassVar[ARKind] = ARKind.COMPOSITION_SW_COMPONENT_TYPE

    def find_component(self, name: str) -> SwComponentPrototype | None:
        return next((c for c in self.components if c.short_name == name), None)
