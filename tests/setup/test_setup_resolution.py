"""Tests for Setup declarations and inheritance resolution."""

import threading

import pytest

from searchable.base.errors import ConfigurationError, CyclicHierarchyError
from searchable.fields.field import Field
from searchable.fields.types import INTEGER, STRING, TEXT, DeclarationKind
from searchable.setup import DeclaredHierarchy, SetupRegistry


class Animal:
    pass


class Dog(Animal):
    pass


class Puppy(Dog):
    pass


class Rock:
    pass


def names(factories):
    return sorted(factory.name for factory in factories)


class TestDeduplication:
    """Re-declaring a field replaces it instead of duplicating it."""

    def test_same_signature_keeps_one_entry(self, registry):
        setup = registry.get_or_create(Animal)
        setup.add_field_factory("age", INTEGER, {"stored": False})
        later = setup.add_field_factory("age", INTEGER, {"stored": True})

        own = setup.own_field_factories(DeclarationKind.STATIC)
        assert len(own) == 1
        assert own[0] is later
        assert own[0].stored is True

    def test_text_fields_keyed_by_name(self, registry):
        setup = registry.get_or_create(Animal)
        setup.add_text_field_factory("bio", {"boost": 1.0})
        setup.add_text_field_factory("bio", {"boost": 3.0})

        own = setup.own_field_factories(DeclarationKind.TEXT)
        assert len(own) == 1
        assert own[0].boost == 3.0

    def test_type_change_replaces_declaration(self, registry):
        setup = registry.get_or_create(Animal)
        setup.add_field_factory("age", STRING)
        setup.add_field_factory("age", INTEGER)

        [factory] = setup.own_field_factories(DeclarationKind.STATIC)
        assert factory.field_type is INTEGER

    def test_different_signatures_coexist(self, registry):
        setup = registry.get_or_create(Animal)
        setup.add_field_factory("tag", STRING)
        setup.add_field_factory("tag", STRING, {"multiple": True})
        assert len(setup.own_field_factories(DeclarationKind.STATIC)) == 2

    def test_dynamic_fields_deduplicated(self, registry):
        setup = registry.get_or_create(Animal)
        setup.add_dynamic_field_factory("traits", STRING)
        setup.add_dynamic_field_factory("traits", STRING, {"stored": True})
        assert len(setup.own_field_factories(DeclarationKind.DYNAMIC)) == 1

    def test_invalid_declaration_leaves_setup_unchanged(self, registry):
        setup = registry.get_or_create(Animal)
        with pytest.raises(ConfigurationError):
            setup.add_field_factory("age", INTEGER, {"boost": 2})
        assert setup.own_field_factories(DeclarationKind.STATIC) == []


class TestInheritance:
    """Resolution merges ancestors with nearer declarations winning."""

    def test_child_declaration_takes_precedence(self, registry):
        registry.get_or_create(Animal).add_field_factory("a", INTEGER)
        registry.get_or_create(Dog).add_field_factory("a", TEXT)

        [field] = registry.lookup(Dog).fields()
        assert field.field_type is TEXT

    def test_child_overrides_same_key(self, registry):
        registry.get_or_create(Animal).add_text_field_factory("name", {"boost": 1.0})
        registry.get_or_create(Dog).add_text_field_factory("name", {"boost": 5.0})

        text_fields = registry.lookup(Dog).text_fields()
        assert len(text_fields) == 1
        assert text_fields[0].boost == 5.0

    def test_additive_inheritance(self, registry):
        parent = registry.get_or_create(Animal)
        parent.add_field_factory("a", STRING)
        parent.add_field_factory("b", STRING)
        registry.get_or_create(Dog).add_field_factory("c", STRING)

        assert sorted(field.name for field in registry.lookup(Dog).fields()) == ["a", "b", "c"]

    def test_grandparent_fields_reach_grandchild(self, registry):
        registry.get_or_create(Animal).add_field_factory("a", STRING)
        registry.get_or_create(Puppy).add_field_factory("p", STRING)

        assert names(registry.lookup(Puppy).field_factories()) == ["a", "p"]

    def test_nearest_ancestor_wins(self, registry):
        registry.get_or_create(Animal).add_text_field_factory("name", {"boost": 1.0})
        registry.get_or_create(Dog).add_text_field_factory("name", {"boost": 2.0})
        registry.get_or_create(Puppy).add_field_factory("size", INTEGER)

        [name] = registry.lookup(Puppy).text_field_factories()
        assert name.boost == 2.0

    def test_root_class_resolves_to_own_declarations(self, registry):
        setup = registry.get_or_create(Animal)
        setup.add_field_factory("a", STRING)
        assert setup.parent() is None
        assert names(setup.field_factories()) == ["a"]

    def test_resolution_does_not_mutate_own_maps(self, registry):
        registry.get_or_create(Animal).add_field_factory("a", STRING)
        child = registry.get_or_create(Dog)
        child.add_field_factory("c", STRING)

        child.field_factories()
        assert names(child.own_field_factories(DeclarationKind.STATIC)) == ["c"]

    def test_parent_additions_visible_on_next_resolution(self, registry):
        registry.get_or_create(Animal).add_field_factory("a", STRING)
        child = registry.get_or_create(Dog)
        assert names(child.field_factories()) == ["a"]

        registry.get_or_create(Animal).add_field_factory("late", STRING)
        assert names(child.field_factories()) == ["a", "late"]

    def test_parent_skips_unconfigured_intermediate(self, registry):
        animal = registry.get_or_create(Animal)
        puppy = registry.get_or_create(Puppy)
        assert puppy.parent() is animal

    def test_unconfigured_class_is_not_configured(self, registry):
        registry.get_or_create(Animal)
        assert registry.lookup(Rock) is None


class TestAggregateViews:
    def test_all_field_factories_group_order(self, registry):
        setup = registry.get_or_create(Animal)
        setup.add_dynamic_field_factory("d", STRING)
        setup.add_text_field_factory("t")
        setup.add_field_factory("s", STRING)

        kinds = [factory.kind for factory in setup.all_field_factories()]
        assert kinds == [DeclarationKind.STATIC, DeclarationKind.TEXT, DeclarationKind.DYNAMIC]

    def test_fields_are_built(self, registry):
        setup = registry.get_or_create(Animal)
        setup.add_field_factory("s", STRING)
        assert all(isinstance(field, Field) for field in setup.fields())

    def test_field_factory_by_name(self, registry):
        registry.get_or_create(Animal).add_text_field_factory("bio")
        setup = registry.get_or_create(Dog)
        assert setup.field_factory("bio").kind is DeclarationKind.TEXT
        assert setup.field_factory("missing") is None

    def test_clazz_resolves_live_class(self, registry):
        assert registry.get_or_create(Dog).clazz is Dog


class TestEvaluateConfiguration:
    def test_block_receives_builder(self, registry):
        setup = registry.get_or_create(Animal)
        setup.evaluate_configuration(lambda fields: fields.text("name"))
        assert names(setup.text_field_factories()) == ["name"]

    def test_repeated_evaluation_merges(self, registry):
        setup = registry.get_or_create(Animal)
        setup.evaluate_configuration(lambda fields: fields.string("a"))
        setup.evaluate_configuration(lambda fields: fields.string("a", "b"))
        assert names(setup.field_factories()) == ["a", "b"]

    def test_returns_setup(self, registry):
        setup = registry.get_or_create(Animal)
        assert setup.evaluate_configuration(lambda fields: None) is setup

    def test_non_callable_block_raises(self, registry):
        with pytest.raises(ConfigurationError):
            registry.get_or_create(Animal).evaluate_configuration("fields.text('name')")


class TestEndToEnd:
    def test_animal_dog_scenario(self, registry):
        registry.configure(Animal, lambda fields: fields.field("name", TEXT))
        registry.configure(Dog, lambda fields: fields.dynamic_field("breed_*", TEXT))

        setup = registry.lookup(Dog)
        factories = setup.all_field_factories()
        assert [(f.kind, f.name) for f in factories] == [
            (DeclarationKind.STATIC, "name"),
            (DeclarationKind.DYNAMIC, "breed_*"),
        ]
        assert setup.text_field_factories() == []


class TestDeclaredHierarchyResolution:
    def test_resolution_over_type_tags(self):
        registry = SetupRegistry(hierarchy=DeclaredHierarchy({"Dog": "Animal", "Animal": None}))
        registry.configure("Animal", lambda fields: fields.string("name"))
        registry.configure("Dog", lambda fields: fields.integer("age"))
        assert names(registry.lookup("Dog").field_factories()) == ["age", "name"]

    def test_cycle_raises_during_resolution(self):
        hierarchy = DeclaredHierarchy({"A": "B", "B": "A"})
        registry = SetupRegistry(hierarchy=hierarchy)
        registry.configure("A", lambda fields: fields.string("a"))
        registry.configure("B", lambda fields: fields.string("b"))

        with pytest.raises(CyclicHierarchyError):
            registry.lookup("A").field_factories()


class TestConcurrentDeclarations:
    def test_concurrent_adds_and_resolution(self, registry):
        parent = registry.get_or_create(Animal)
        child = registry.get_or_create(Dog)
        errors = []

        def declare(prefix):
            try:
                for i in range(200):
                    parent.add_field_factory(f"{prefix}{i}", STRING)
            except Exception as e:  # pragma: no cover - surfaced by assertion below
                errors.append(e)

        def resolve():
            try:
                for _ in range(200):
                    child.all_field_factories()
            except Exception as e:  # pragma: no cover - surfaced by assertion below
                errors.append(e)

        threads = [threading.Thread(target=declare, args=(p,)) for p in "xyz"]
        threads += [threading.Thread(target=resolve) for _ in range(3)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(child.field_factories()) == 600
