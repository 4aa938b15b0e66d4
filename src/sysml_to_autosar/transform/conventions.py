"""Naming conventions, stereotype names and numeric defaults of the mapping.

These tables mirror the modeling profile: the stereotypes and tags a source
model uses, and the prefixes and suffixes the generated AUTOSAR elements get.
"""

from __future__ import annotations

# =============================================================================
# Source profile
# =============================================================================

STEREOTYPE_OPERATION_WITH_EVENT = "operationWevent"
STEREOTYPE_OPERATION_WITH_DATA = "operationWdata"
STEREOTYPE_PIM_PROPERTY = "PIMProperty"
STEREOTYPE_CALIBRATION_PROPERTY = "CalibrationProperty"
STEREOTYPE_PERIODIC = "periodic"

TAG_EVENT = "event"
TAG_PERIOD = "period"
TAG_DATA_RECEIVED = "dataReceived"
TAG_TYPE = "type"
TAG_UNIT = "unit"

# =============================================================================
# Target package hierarchy
# =============================================================================

PKG_SOFTWARE_TYPES = "SoftwareTypes"
PKG_COMPONENT_TYPES = "ComponentTypes"
PKG_INTERFACES = "Interfaces"
PKG_DATA_TYPES = "DataTypes"
PKG_IMPLEMENTATION_DATA_TYPES = "ImplementationDataTypes"
PKG_APPLICATION_DATA_TYPES = "ApplicationDataTypes"
PKG_BASE_TYPES = "BaseTypes"
PKG_COMPU_METHODS = "CompuMethods"
PKG_UNITS = "Units"

COMPONENT_TYPES_PATH = (PKG_SOFTWARE_TYPES, PKG_COMPONENT_TYPES)
INTERFACES_PATH = (PKG_SOFTWARE_TYPES, PKG_INTERFACES)
IMPLEMENTATION_DATA_TYPES_PATH = (PKG_DATA_TYPES, PKG_IMPLEMENTATION_DATA_TYPES)
APPLICATION_DATA_TYPES_PATH = (PKG_DATA_TYPES, PKG_APPLICATION_DATA_TYPES)
BASE_TYPES_PATH = (PKG_DATA_TYPES, PKG_BASE_TYPES)
COMPU_METHODS_PATH = (PKG_DATA_TYPES, PKG_COMPU_METHODS)
UNITS_PATH = (PKG_DATA_TYPES, PKG_UNITS)

# =============================================================================
# Generated names
# =============================================================================

PREFIX_INTERNAL_BEHAVIOR = "IB_"
PREFIX_TIMING_EVENT = "TE_"
PREFIX_DATA_RECEIVED = "DR_"
PREFIX_DATA_SEND = "DS_"
PREFIX_SERVER_CALL_POINT = "OI_OA_"
PREFIX_COMPONENT_PROTOTYPE = "CtSt_"
PREFIX_SENDER_RECEIVER_HOLDER = "SRI_"

SUFFIX_PER_INSTANCE_MEMORY = "_NV"
SUFFIX_CALIBRATION = "_C"
SUFFIX_COMPOSITION = "_Cmpstn"

INIT_VALUE_LABEL = "Init_0"
ENUM_UNIT_NAME = "EnumUnit"

# =============================================================================
# Categories and defaults
# =============================================================================

COMPU_CATEGORY_TEXTTABLE = "TEXTTABLE"
APP_DATA_TYPE_CATEGORY = "VALUE"
IMPL_DATA_TYPE_CATEGORY = "VALUE"

INIT_VALUE = 0.0
SERVER_CALL_TIMEOUT = 1.0
RUNNABLE_MIN_START_INTERVAL = 100.0
RUNNABLE_CAN_BE_INVOKED_CONCURRENTLY = False
SUPPORTS_MULTIPLE_INSTANTIATION = False
