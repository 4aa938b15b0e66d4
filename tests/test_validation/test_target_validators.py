"""Tests for target model completeness checks."""

from sysml_to_autosar.target import (
    ApplicationSwComponentType,
    ARModel,
    ARPackage,
    AssemblySwConnector,
    CompositionSwComponentType,
    PPortInCompositionInstanceRef,
    PPortPrototype,
    SenderReceiverInterface,
    SwcInternalBehavior,
    TimingEvent,
)
from sysml_to_autosar.transform import TransformResult
from sysml_to_autosar.validation import ErrorCodes, TargetCompletenessValidator


def _model(*elements: ApplicationSwComponentType | CompositionSwComponentType) -> ARModel:
    model = ARModel(name="Test")
    package = ARPackage(short_name="Pkg", elements=list(elements))
    model.add_package(package)
    return model


class TestTargetCompletenessValidator:
    """Tests for TargetCompletenessValidator."""

    def test_complete_model(self, full_result: TransformResult) -> None:
        """Should report nothing for a clean transformation."""
        result = TargetCompletenessValidator().validate(full_result.model)

        assert result.issues == []

    def test_node_in_progress(self) -> None:
        """Should error on a node left in progress."""
        component = ApplicationSwComponentType(short_name="Comp")
        component.in_progress = True

        result = TargetCompletenessValidator().validate(_model(component))

        assert not result.is_valid
        assert [e.code for e in result.errors] == [ErrorCodes.T401_INCOMPLETE_NODE]
        assert str(result.errors[0].location) == "/Pkg/Comp"

    def test_port_without_interface(self) -> None:
        """Should warn on a port with no interface."""
        component = ApplicationSwComponentType(
            short_name="Comp", ports=[PPortPrototype(short_name="pOut")]
        )

        result = TargetCompletenessValidator().validate(_model(component))

        assert result.is_valid
        assert [w.code for w in result.warnings] == [ErrorCodes.T402_PORT_WITHOUT_INTERFACE]
        assert str(result.warnings[0].location) == "/Pkg/Comp/pOut"

    def test_event_without_runnable(self) -> None:
        """Should warn on an event that starts nothing."""
        behavior = SwcInternalBehavior(
            short_name="IB_Comp", events=[TimingEvent(short_name="TE_Tick", period=0.1)]
        )
        component = ApplicationSwComponentType(short_name="Comp", internal_behaviors=[behavior])

        result = TargetCompletenessValidator().validate(_model(component))

        assert [w.code for w in result.warnings] == [ErrorCodes.T403_EVENT_WITHOUT_RUNNABLE]

    def test_connector_without_ends(self) -> None:
        """Should warn on a connector missing a side."""
        connector = AssemblySwConnector(short_name="conn")
        composition = CompositionSwComponentType(short_name="Top", connectors=[connector])

        result = TargetCompletenessValidator().validate(_model(composition))

        warnings = [w for w in result.warnings if w.code == ErrorCodes.T404_CONNECTOR_INCOMPLETE]
        assert len(warnings) == 1
        assert "provider or requester" in warnings[0].message

    def test_detached_reference(self) -> None:
        """Should warn on a reference to a node outside the model."""
        detached = SenderReceiverInterface(short_name="ILost")
        port = PPortPrototype(short_name="pOut", provided_interface=detached)
        component = ApplicationSwComponentType(short_name="Comp", ports=[port])

        result = TargetCompletenessValidator().validate(_model(component))

        warnings = [w for w in result.warnings if w.code == ErrorCodes.T405_DETACHED_REFERENCE]
        assert len(warnings) == 1
        assert "'ILost'" in warnings[0].message
        assert "PROVIDED-INTERFACE-TREF" in warnings[0].message

    def test_non_referrable_nodes_use_nearest_path(self) -> None:
        """Should locate non-referrable nodes through their container."""
        provider = PPortInCompositionInstanceRef()
        provider.in_progress = True
        connector = AssemblySwConnector(short_name="conn", provider=provider)
        composition = CompositionSwComponentType(short_name="Top", connectors=[connector])

        result = TargetCompletenessValidator().validate(_model(composition))

        assert str(result.errors[0].location) == (
            "/Pkg/Top/conn (P-PORT-IN-COMPOSITION-INSTANCE-REF)"
        )
