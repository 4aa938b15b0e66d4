"""Build the source graph from a validated source document."""

from __future__ import annotations

from sysml_to_autosar.models.common import ElementDefinition, TagDefinition, TagValue
from sysml_to_autosar.models.elements import (
    ArgumentDefinition,
    ComponentDefinition,
    InterfaceDefinition,
    OperationDefinition,
    PackageDefinition,
    ReceptionDefinition,
)
from sysml_to_autosar.models.root import SourceDocument
from sysml_to_autosar.source.graph import (
    Argument,
    Attribute,
    Classifier,
    ClassifierKind,
    DataType,
    DataTypeKind,
    EnumerationLiteral,
    Event,
    EventReception,
    Instance,
    Link,
    Operation,
    Package,
    Port,
    SourceElement,
    SourceModel,
    Tag,
)

# Scalar tags with these names hold a data type name rather than free text
TYPE_REFERENCE_TAGS = frozenset({"type"})


class SourceModelError(Exception):
    """A reference in the source document cannot be resolved."""

    def __init__(self, message: str, location: str | None = None) -> None:
        """Initialize SourceModelError.

        Args:
        ----
            message: What could not be resolved.
            location: Dotted path of the offending element.

        """
        self.location = location
        super().__init__(f"{location}: {message}" if location else message)


def _tag_text(value: TagValue) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SourceModelBuilder:
    """Turn a SourceDocument into a linked source graph.

    Names are resolved in the element's own package first and then across
    all packages in declaration order.

    Usage:
        builder = SourceModelBuilder()
        model = builder.build(document)
    """

    def __init__(self) -> None:
        """Initialize the builder."""
        self._packages: list[Package] = []

    def build(self, doc: SourceDocument) -> SourceModel:
        """Build the source graph.

        Args:
        ----
            doc: Validated source document.

        Returns:
        -------
            The source model with every reference resolved.

        Raises:
        ------
            SourceModelError: If a referenced type, event, interface,
                component, instance or port does not exist.

        """
        model = SourceModel(
            name=doc.meta.name,
            author=doc.meta.author,
            revision=doc.meta.revision,
        )
        pairs: list[tuple[PackageDefinition, Package]] = []
        for pkg_def in doc.packages:
            package = Package(name=pkg_def.name, stereotypes=list(pkg_def.stereotypes))
            model.packages.append(package)
            pairs.append((pkg_def, package))
        self._packages = model.packages

        # Types first: every later phase may reference them
        for pkg_def, package in pairs:
            self._process_types(pkg_def, package)
        for pkg_def, package in pairs:
            self._process_type_tags(pkg_def, package)
        for pkg_def, package in pairs:
            self._process_events(pkg_def, package)
        for pkg_def, package in pairs:
            self._process_interfaces(pkg_def, package)
        for pkg_def, package in pairs:
            self._process_components(pkg_def, package)
        for pkg_def, package in pairs:
            self._process_instances(pkg_def, package)
            self._process_links(pkg_def, package)
        for pkg_def, package in pairs:
            package.tags = self._build_tags(pkg_def, package, package.name)

        return model

    # ------------------------------------------------------------------
    # Name resolution
    # ------------------------------------------------------------------

    def _search_order(self, package: Package) -> list[Package]:
        return [package] + [p for p in self._packages if p is not package]

    def _resolve_type(self, name: str | None, package: Package, location: str) -> DataType | None:
        if name is None:
            return None
        for candidate in self._search_order(package):
            for data_type in candidate.data_types:
                if data_type.name == name:
                    return data_type
        raise SourceModelError(f"Unknown data type '{name}'", location)

    def _resolve_event(self, name: str, package: Package, location: str) -> Event:
        for candidate in self._search_order(package):
            event = candidate.find_event(name)
            if event is not None:
                return event
        raise SourceModelError(f"Unknown event '{name}'", location)

    def _resolve_classifier(
        self,
        name: str,
        package: Package,
        location: str,
        *,
        interface: bool,
    ) -> Classifier:
        for candidate in self._search_order(package):
            classifier = candidate.find_classifier(name)
            if classifier is None:
                continue
            if classifier.is_interface != interface:
                expected = "an interface" if interface else "a component"
                raise SourceModelError(f"'{name}' is not {expected}", location)
            return classifier
        kind = "interface" if interface else "component"
        raise SourceModelError(f"Unknown {kind} '{name}'", location)

    # ------------------------------------------------------------------
    # Element construction
    # ------------------------------------------------------------------

    def _build_tags(
        self, definition: ElementDefinition, package: Package, location: str
    ) -> dict[str, Tag]:
        tags: dict[str, Tag] = {}
        for tag_name, raw in definition.tags.items():
            tag_location = f"{location}.tags.{tag_name}"
            if isinstance(raw, TagDefinition):
                tag_type = self._resolve_type(raw.type, package, tag_location)
                tags[tag_name] = Tag(name=tag_name, value=raw.value, type=tag_type)
                continue
            text = _tag_text(raw)
            tag_type = None
            if tag_name in TYPE_REFERENCE_TAGS:
                tag_type = self._resolve_type(text, package, tag_location)
            tags[tag_name] = Tag(name=tag_name, value=text, type=tag_type)
        return tags

    def _init_element(
        self,
        element: SourceElement,
        definition: ElementDefinition,
        package: Package,
        location: str,
    ) -> None:
        element.stereotypes = list(definition.stereotypes)
        element.tags = self._build_tags(definition, package, location)

    def _build_arguments(
        self,
        definitions: list[ArgumentDefinition],
        owner: SourceElement,
        package: Package,
        location: str,
    ) -> list[Argument]:
        arguments = []
        for arg_def in definitions:
            arg_location = f"{location}.{arg_def.name}"
            argument = Argument(
                name=arg_def.name,
                owner=owner,
                type=self._resolve_type(arg_def.type, package, arg_location),
            )
            self._init_element(argument, arg_def, package, arg_location)
            arguments.append(argument)
        return arguments

    def _build_operation(
        self, op_def: OperationDefinition, owner: Classifier, package: Package
    ) -> Operation:
        location = f"{package.name}.{owner.name}.{op_def.name}"
        operation = Operation(name=op_def.name, owner=owner)
        self._init_element(operation, op_def, package, location)
        operation.operation_arguments = self._build_arguments(
            op_def.arguments, operation, package, location
        )
        return operation

    def _build_reception(
        self, rec_def: ReceptionDefinition, owner: Classifier, package: Package
    ) -> EventReception:
        location = f"{package.name}.{owner.name}.{rec_def.effective_name}"
        return EventReception(
            name=rec_def.effective_name,
            owner=owner,
            stereotypes=list(rec_def.stereotypes),
            event=self._resolve_event(rec_def.event, package, location),
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _process_types(self, pkg_def: PackageDefinition, package: Package) -> None:
        """Create data types with their enumeration literals."""
        for type_def in pkg_def.types:
            data_type = DataType(
                name=type_def.name,
                owner=package,
                kind=DataTypeKind(type_def.kind),
            )
            for position, literal_def in enumerate(type_def.literals):
                value = literal_def.value if literal_def.value is not None else position
                data_type.literals.append(
                    EnumerationLiteral(name=literal_def.name, owner=data_type, value=value)
                )
            data_type.stereotypes = list(type_def.stereotypes)
            package.data_types.append(data_type)

    def _process_type_tags(self, pkg_def: PackageDefinition, package: Package) -> None:
        """Attach tags to data types once every type is known."""
        for type_def, data_type in zip(pkg_def.types, package.data_types):
            data_type.tags = self._build_tags(type_def, package, f"{package.name}.{type_def.name}")

    def _process_events(self, pkg_def: PackageDefinition, package: Package) -> None:
        """Create package-level events with their arguments."""
        for event_def in pkg_def.events:
            location = f"{package.name}.{event_def.name}"
            event = Event(name=event_def.name, owner=package)
            self._init_element(event, event_def, package, location)
            event.arguments = self._build_arguments(event_def.arguments, event, package, location)
            package.events.append(event)

    def _process_interfaces(self, pkg_def: PackageDefinition, package: Package) -> None:
        """Create interfaces and their items."""
        for iface_def in pkg_def.interfaces:
            package.classifiers.append(self._build_interface(iface_def, package))

    def _build_interface(self, iface_def: InterfaceDefinition, package: Package) -> Classifier:
        location = f"{package.name}.{iface_def.name}"
        interface = Classifier(
            name=iface_def.name,
            owner=package,
            kind=ClassifierKind.INTERFACE,
        )
        self._init_element(interface, iface_def, package, location)
        for item_def in iface_def.items:
            if isinstance(item_def, ReceptionDefinition):
                interface.interface_items.append(
                    self._build_reception(item_def, interface, package)
                )
            else:
                interface.interface_items.append(
                    self._build_operation(item_def, interface, package)
                )
        return interface

    def _process_components(self, pkg_def: PackageDefinition, package: Package) -> None:
        """Create components with ports, operations and attributes."""
        for comp_def in pkg_def.components:
            package.classifiers.append(self._build_component(comp_def, package))

    def _build_component(self, comp_def: ComponentDefinition, package: Package) -> Classifier:
        location = f"{package.name}.{comp_def.name}"
        component = Classifier(
            name=comp_def.name,
            owner=package,
            kind=ClassifierKind(comp_def.kind),
        )
        self._init_element(component, comp_def, package, location)

        for port_def in comp_def.ports:
            port_location = f"{location}.{port_def.name}"
            port = Port(
                name=port_def.name,
                owner=component,
                provided_interfaces=[
                    self._resolve_classifier(name, package, port_location, interface=True)
                    for name in port_def.provides
                ],
                required_interfaces=[
                    self._resolve_classifier(name, package, port_location, interface=True)
                    for name in port_def.requires
                ],
            )
            self._init_element(port, port_def, package, port_location)
            component.ports.append(port)

        for op_def in comp_def.operations:
            component.interface_items.append(self._build_operation(op_def, component, package))

        for attr_def in comp_def.attributes:
            attr_location = f"{location}.{attr_def.name}"
            attribute = Attribute(
                name=attr_def.name,
                owner=component,
                type=self._resolve_type(attr_def.type, package, attr_location),
                is_static=attr_def.static,
            )
            self._init_element(attribute, attr_def, package, attr_location)
            component.attributes.append(attribute)

        return component

    def _process_instances(self, pkg_def: PackageDefinition, package: Package) -> None:
        """Create instances typed by components."""
        for inst_def in pkg_def.instances:
            location = f"{package.name}.{inst_def.name}"
            instance = Instance(
                name=inst_def.name,
                owner=package,
                type=self._resolve_classifier(inst_def.type, package, location, interface=False),
            )
            self._init_element(instance, inst_def, package, location)
            package.instances.append(instance)

    def _process_links(self, pkg_def: PackageDefinition, package: Package) -> None:
        """Create links, resolving instances and their type's ports."""
        for link_def in pkg_def.links:
            name = link_def.effective_name
            location = f"{package.name}.{name}"
            from_instance, from_port = self._resolve_endpoint(
                link_def.from_.instance, link_def.from_.port, package, location
            )
            to_instance, to_port = self._resolve_endpoint(
                link_def.to.instance, link_def.to.port, package, location
            )
            package.links.append(
                Link(
                    name=name,
                    owner=package,
                    from_instance=from_instance,
                    from_port=from_port,
                    to_instance=to_instance,
                    to_port=to_port,
                )
            )

    def _resolve_endpoint(
        self, instance_name: str, port_name: str, package: Package, location: str
    ) -> tuple[Instance, Port]:
        instance = next((i for i in package.instances if i.name == instance_name), None)
        if instance is None:
            raise SourceModelError(f"Unknown instance '{instance_name}'", location)
        assert instance.type is not None
        port = next((p for p in instance.type.ports if p.name == port_name), None)
        if port is None:
            raise SourceModelError(
                f"Instance '{instance_name}' of '{instance.type.name}' has no port '{port_name}'",
                location,
            )
        return instance, port


def build_source_model(doc: SourceDocument) -> SourceModel:
    """Build the source graph from a validated document.

    Args:
    ----
        doc: Validated source document.

    Returns:
    -------
        The linked source model.

    """
    return SourceModelBuilder().build(doc)
