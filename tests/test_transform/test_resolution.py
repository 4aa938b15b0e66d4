"""Tests for name-resolution helpers."""

from __future__ import annotations

from sysml_to_autosar.source import Classifier, Port, SourceModel
from sysml_to_autosar.transform import DiagnosticCodes, DiagnosticLog
from sysml_to_autosar.transform.resolution import (
    find_all_operation_impls_for_event,
    find_all_operation_matches,
    find_all_operations_with_event,
    find_all_providing_ports,
    find_operation_impl_for_event,
    find_operation_match,
    find_operation_with_event,
    find_providing_port,
    find_requiring_port,
    is_client_server_operation_impl,
    is_provided_operation_impl,
)

from tests.fixtures.source_graphs import cs_operation, make_component, make_interface


def _worker(source: SourceModel) -> Classifier:
    worker = source.packages[0].find_classifier("Worker")
    assert worker is not None
    return worker


class TestOperationMatching:
    """Tests for suffix matching of implementation operations."""

    def test_single_suffix_match(self, suffix_source: SourceModel) -> None:
        """'implfoo' ends with 'foo' only."""
        implfoo = _worker(suffix_source).operations[0]

        match = find_operation_match(implfoo)

        assert match is not None
        assert match.operation.name == "foo"
        assert [m.operation.name for m in find_all_operation_matches(implfoo)] == ["foo"]

    def test_first_match_wins(self, suffix_source: SourceModel) -> None:
        """'implbarfoo' ends with both; declaration order decides."""
        implbarfoo = _worker(suffix_source).operations[1]

        match = find_operation_match(implbarfoo)
        matches = find_all_operation_matches(implbarfoo)

        assert match is not None
        assert match.operation.name == "foo"
        assert [m.operation.name for m in matches] == ["foo", "barfoo"]

    def test_match_carries_port_and_component(self, suffix_source: SourceModel) -> None:
        """A match knows the port, interface and owning component."""
        worker = _worker(suffix_source)

        match = find_operation_match(worker.operations[0])

        assert match is not None
        assert match.port is worker.ports[0]
        assert match.interface.name == "IOps"
        assert match.component is worker

    def test_providing_and_requiring_ports(self, suffix_source: SourceModel) -> None:
        """Provided interfaces are searched separately from required ones."""
        implfoo = _worker(suffix_source).operations[0]

        assert find_providing_port(implfoo) is _worker(suffix_source).ports[0]
        assert find_requiring_port(implfoo) is None
        assert is_provided_operation_impl(implfoo)

    def test_distinct_ports(self, suffix_source: SourceModel) -> None:
        """Two matches through the same port list the port once."""
        implbarfoo = _worker(suffix_source).operations[1]

        assert find_all_providing_ports(implbarfoo) == [_worker(suffix_source).ports[0]]

    def test_no_match(self) -> None:
        """An operation matching nothing has no port."""
        impl = cs_operation("unrelated")
        port = Port(name="p", provided_interfaces=[make_interface("I", cs_operation("Start"))])
        make_component("C", ports=[port], operations=[impl])

        assert find_operation_match(impl) is None
        assert not is_provided_operation_impl(impl)

    def test_client_server_operation_impl_uses_exact_name(
        self, suffix_source: SourceModel
    ) -> None:
        """Only an interface operation of the same name counts."""
        worker = _worker(suffix_source)

        assert not is_client_server_operation_impl(worker.operations[0], worker)
        foo = cs_operation("foo")
        assert is_client_server_operation_impl(foo, worker)


class TestEventResolution:
    """Tests for event to operation resolution."""

    def test_operation_with_event(self, suffix_source: SourceModel) -> None:
        """The «operationWevent» operation tagged with the event is found."""
        event = suffix_source.packages[0].find_event("evBarfoo")
        assert event is not None

        match = find_operation_with_event(event)

        assert match is not None
        assert match.operation.name == "barfoo"
        assert len(find_all_operations_with_event(event)) == 1

    def test_required_side_is_separate(self, suffix_source: SourceModel) -> None:
        """Worker only provides IOps, so nothing is required."""
        event = suffix_source.packages[0].find_event("evFoo")
        assert event is not None

        assert find_operation_with_event(event, provided=False) is None

    def test_component_restriction(self, full_source: SourceModel) -> None:
        """The search can be limited to one component."""
        package = full_source.packages[0]
        event = package.find_event("evStart")
        dashboard = package.find_classifier("Dashboard")
        engine = package.find_classifier("EngineCtrl")
        assert event is not None and dashboard is not None and engine is not None

        assert find_operation_with_event(event, component=dashboard) is None
        assert find_operation_with_event(event, component=engine) is not None
        # Dashboard requires the interface
        assert find_operation_with_event(event, provided=False, component=dashboard) is not None

    def test_implementation_for_event(self, suffix_source: SourceModel) -> None:
        """The first component operation ending with the operation name implements it."""
        package = suffix_source.packages[0]
        ev_foo = package.find_event("evFoo")
        ev_barfoo = package.find_event("evBarfoo")
        assert ev_foo is not None and ev_barfoo is not None

        assert [op.name for op in find_all_operation_impls_for_event(ev_foo)] == [
            "implfoo",
            "implbarfoo",
        ]
        impl = find_operation_impl_for_event(ev_foo)
        assert impl is not None and impl.name == "implfoo"
        impl = find_operation_impl_for_event(ev_barfoo)
        assert impl is not None and impl.name == "implbarfoo"

    def test_missing_operation_reported(self, full_source: SourceModel) -> None:
        """An event without an operation is reported as severe."""
        diagnostics = DiagnosticLog()
        event = full_source.packages[0].find_event("evSpeedChanged")
        assert event is not None

        assert find_operation_impl_for_event(event, diagnostics=diagnostics) is None
        assert diagnostics.codes() == [DiagnosticCodes.M105_MISSING_OPERATION]
