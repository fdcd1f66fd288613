"""Tests for the container builder."""

import pytest

from fosuser import (
    Alias,
    ContainerBuilder,
    ContainerError,
    Definition,
    FrozenParameterError,
    ParameterNotFoundError,
    Reference,
    ServiceNotFoundError,
)


class TestDefinitions:
    def test_register_and_get(self) -> None:
        container = ContainerBuilder()
        definition = container.register("acme.mailer", "acme.Mailer")
        assert container.get_definition("acme.mailer") is definition
        assert container.has("acme.mailer")

    def test_missing_definition(self) -> None:
        with pytest.raises(ServiceNotFoundError, match="acme.mailer"):
            ContainerBuilder().get_definition("acme.mailer")

    def test_alias_replaces_definition(self) -> None:
        container = ContainerBuilder()
        container.register("fos_user.mailer", "acme.Mailer")
        container.set_alias("fos_user.mailer", "acme.mailer")
        assert not container.has_definition("fos_user.mailer")
        assert container.get_alias("fos_user.mailer") == Alias(target="acme.mailer")

    def test_definition_replaces_alias(self) -> None:
        container = ContainerBuilder()
        container.set_alias("fos_user.mailer", "acme.mailer")
        container.register("fos_user.mailer", "acme.Mailer")
        assert not container.has_alias("fos_user.mailer")

    def test_self_referencing_alias(self) -> None:
        with pytest.raises(ContainerError, match="circular"):
            ContainerBuilder().set_alias("acme.mailer", "acme.mailer")

    def test_argument_out_of_range(self) -> None:
        definition = Definition(class_name="acme.Mailer", arguments=[Reference("mailer")])
        assert definition.get_argument(0) == Reference("mailer")
        with pytest.raises(IndexError, match="doesn't exist"):
            definition.get_argument(3)

    def test_tags(self) -> None:
        definition = ContainerBuilder().register("acme.listener")
        definition.add_tag("kernel.event_subscriber", priority=10)
        assert definition.has_tag("kernel.event_subscriber")
        assert definition.tags == {"kernel.event_subscriber": [{"priority": 10}]}
        assert not definition.has_tag("doctrine.event_subscriber")


class TestParameters:
    def test_missing_parameter(self) -> None:
        with pytest.raises(ParameterNotFoundError, match="acme.host"):
            ContainerBuilder().get_parameter("acme.host")

    def test_frozen(self) -> None:
        container = ContainerBuilder()
        container.set_parameter("acme.host", "localhost")
        container.freeze()
        with pytest.raises(FrozenParameterError):
            container.set_parameter("acme.host", "example.org")
        assert container.get_parameter("acme.host") == "localhost"

    def test_resolve_keeps_parameter_type(self) -> None:
        container = ContainerBuilder()
        container.set_parameter("acme.ttl", 3600)
        container.set_parameter("acme.sender", {"admin@acme.org": "Acme Corp"})
        assert container.resolve_value("%acme.ttl%") == 3600
        assert container.resolve_value({"from": "%acme.sender%"}) == {
            "from": {"admin@acme.org": "Acme Corp"}
        }

    def test_resolve_embedded_placeholders(self) -> None:
        container = ContainerBuilder()
        container.set_parameter("acme.host", "localhost")
        container.set_parameter("acme.port", 8080)
        assert container.resolve_value("http://%acme.host%:%acme.port%/") == "http://localhost:8080/"
        assert container.resolve_value("100%% done") == "100% done"

    def test_resolve_nested_parameters(self) -> None:
        container = ContainerBuilder()
        container.set_parameter("acme.root", "/srv")
        container.set_parameter("acme.templates", "%acme.root%/templates")
        assert container.resolve_value(["%acme.templates%", None, True]) == [
            "/srv/templates",
            None,
            True,
        ]

    def test_resolve_leaves_references(self) -> None:
        reference = Reference("router")
        assert ContainerBuilder().resolve_value([reference]) == [reference]

    def test_resolve_circular_parameters(self) -> None:
        container = ContainerBuilder()
        container.set_parameter("a", "%b%")
        container.set_parameter("b", "%a%")
        with pytest.raises(ContainerError, match="Circular reference"):
            container.resolve_value("%a%")

    def test_resolve_collection_inside_string(self) -> None:
        container = ContainerBuilder()
        container.set_parameter("acme.groups", ["Default"])
        with pytest.raises(ContainerError, match="must be composed of strings"):
            container.resolve_value("groups: %acme.groups%")


class TestMerge:
    def test_merge(self) -> None:
        staging = ContainerBuilder()
        staging.register("acme.mailer", "acme.Mailer")
        staging.set_alias("fos_user.mailer", "acme.mailer")
        staging.set_parameter("acme.host", "localhost")

        container = ContainerBuilder()
        container.set_parameter("kernel.debug", False)
        container.merge(staging)

        assert container.has_definition("acme.mailer")
        assert str(container.get_alias("fos_user.mailer")) == "acme.mailer"
        assert container.parameters == {"kernel.debug": False, "acme.host": "localhost"}
        assert list(container) == ["acme.mailer", "fos_user.mailer"]
