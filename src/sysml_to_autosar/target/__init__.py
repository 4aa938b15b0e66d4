"""Target graph (AUTOSAR-like software component description)."""

from sysml_to_autosar.target.base import (
    ARElement,
    ARKind,
    Containment,
    FieldRole,
    contained_field_names,
    role_fields,
)
from sysml_to_autosar.target.elements import (
    ApplicationPrimitiveDataType,
    ApplicationSwComponentType,
    ArgumentDataPrototype,
    ARPackage,
    AssemblySwConnector,
    AutosarVariableRef,
    ClientComSpec,
    ClientServerInterface,
    ClientServerOperation,
    CompositionSwComponentType,
    CompuMethod,
    CompuScale,
    DataReceivedEvent,
    ImplementationDataType,
    Limit,
    NonqueuedReceiverComSpec,
    NonqueuedSenderComSpec,
    NumericalValueSpecification,
    OperationInvokedEvent,
    ParameterDataPrototype,
    PerInstanceMemory,
    POperationInAtomicSwcInstanceRef,
    PPortInCompositionInstanceRef,
    PPortPrototype,
    ROperationInAtomicSwcInstanceRef,
    RPortInCompositionInstanceRef,
    RPortPrototype,
    RunnableEntity,
    RVariableInAtomicSwcInstanceRef,
    SenderReceiverInterface,
    ServerComSpec,
    SwcInternalBehavior,
    SwComponentPrototype,
    SwDataDefProps,
    SwDataDefPropsConditional,
    SynchronousServerCallPoint,
    TimingEvent,
    Unit,
    VariableAccess,
    VariableDataPrototype,
    VariableInAtomicSwcTypeInstanceRef,
)
from sysml_to_autosar.target.model import KIND_TO_CLASS, ARModel

__all__ = [
    "KIND_TO_CLASS",
    "ARElement",
    "ARKind",
    "ARModel",
    "ARPackage",
    "ApplicationPrimitiveDataType",
    "ApplicationSwComponentType",
    "ArgumentDataPrototype",
    "AssemblySwConnector",
    "AutosarVariableRef",
    "ClientComSpec",
    "ClientServerInterface",
    "ClientServerOperation",
    "CompositionSwComponentType",
    "CompuMethod",
    "CompuScale",
    "Containment",
    "DataReceivedEvent",
    "FieldRole",
    "ImplementationDataType",
    "Limit",
    "NonqueuedReceiverComSpec",
    "NonqueuedSenderComSpec",
    "NumericalValueSpecification",
    "OperationInvokedEvent",
    "POperationInAtomicSwcInstanceRef",
    "PPortInCompositionInstanceRef",
    "PPortPrototype",
    "ParameterDataPrototype",
    "PerInstanceMemory",
    "ROperationInAtomicSwcInstanceRef",
    "RPortInCompositionInstanceRef",
    "RPortPrototype",
    "RVariableInAtomicSwcInstanceRef",
    "RunnableEntity",
    "SenderReceiverInterface",
    "ServerComSpec",
    "SwComponentPrototype",
    "SwDataDefProps",
    "SwDataDefPropsConditional",
    "SwcInternalBehavior",
    "SynchronousServerCallPoint",
    "TimingEvent",
    "Unit",
    "VariableAccess",
    "VariableDataPrototype",
    "VariableInAtomicSwcTypeInstanceRef",
    "contained_field_names",
    "role_fields",
]
