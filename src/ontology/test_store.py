"""
Unit test for the ontology store.

HOW TO RUN:
The virtual environment .venv should be activated before running the tests.

From the src directory, run:
    python -m ontology.test_store

Or from the project root:
    cd src; python -m ontology.test_store
"""

import json

from .store import OntologyStore
from .domain import (
    Domain,
    OntologyClass,
    OntologyProperty,
    OntologyRelationship,
    OntologyStats,
    PropertyType,
)


def make_class(class_id, supers=(), **kwargs):
    return OntologyClass(id=class_id, name=class_id.capitalize(), super_classes=set(supers), **kwargs)


def assert_symmetric(store):
    """B in A.sub_classes <=> A in B.super_classes, for classes in the store."""
    for a in store.classes.values():
        for b in store.classes.values():
            assert (b.id in a.sub_classes) == (a.id in b.super_classes), (a.id, b.id)


def test_empty_store():
    """Test an empty store."""
    print("Testing empty store...")

    store = OntologyStore()
    stats = store.get_statistics()

    assert isinstance(stats, OntologyStats)
    assert stats.total_classes == 0
    assert stats.max_depth == 0
    assert store.get_class_hierarchy() == []
    assert store.get_class("missing") is None

    ontology = store.get_whole_ontology()
    assert ontology["classes"] == []
    assert ontology["relationships"] == []
    assert ontology["stats"]["total_classes"] == 0

    print("✓ Empty store working correctly")


def test_add_class_maintains_sub_classes():
    """Test that super-class back-links are maintained in both insert orders."""
    print("Testing sub-class bookkeeping...")

    store = OntologyStore()
    assert store.add_class(make_class("animal"))
    assert store.add_class(make_class("mammal", ["animal"]))
    # child inserted before its super-class
    assert store.add_class(make_class("dog", ["canine"]))
    assert store.add_class(make_class("canine", ["mammal"]))

    assert store.get_class("animal").sub_classes == {"mammal"}
    assert store.get_class("mammal").sub_classes == {"canine"}
    assert store.get_class("canine").sub_classes == {"dog"}
    assert_symmetric(store)

    print("✓ Sub-class bookkeeping working correctly")


def test_cycle_rejected_without_changes():
    """Test that a cycle-closing insert is rejected and leaves the store unchanged."""
    print("Testing cycle rejection...")

    store = OntologyStore()
    store.add_class(make_class("a"))
    store.add_class(make_class("b", ["a"]))
    store.add_class(make_class("c", ["b"]))
    before = store.get_whole_ontology()

    assert not store.add_class(make_class("a", ["c"]))
    assert not store.add_class(make_class("a", ["a"]))
    assert not store.add_super_class("a", "c")
    assert not store.add_super_class("b", "b")

    after = store.get_whole_ontology()
    assert json.dumps(before["classes"]) == json.dumps(after["classes"])
    assert store.get_class("a").super_classes == set()
    assert_symmetric(store)

    print("✓ Cycle rejection working correctly")


def test_self_reference_on_new_class_rejected():
    """Test that a new class naming itself as super-class is not stored."""
    print("Testing self reference...")

    store = OntologyStore()
    assert not store.add_class(make_class("x", ["x"]))
    assert store.get_class("x") is None

    print("✓ Self reference rejected")


def test_overwrite_class_replaces_links():
    """Test that overwriting a class moves it in the hierarchy."""
    print("Testing class overwrite...")

    store = OntologyStore()
    store.add_class(make_class("animal"))
    store.add_class(make_class("plant"))
    store.add_class(make_class("fern", ["animal"]))
    created = store.get_class("fern").metadata.created

    assert store.add_class(make_class("fern", ["plant"], description="A plant"))

    fern = store.get_class("fern")
    assert fern.super_classes == {"plant"}
    assert fern.description == "A plant"
    assert fern.metadata.created == created
    assert store.get_class("animal").sub_classes == set()
    assert store.get_class("plant").sub_classes == {"fern"}
    assert_symmetric(store)

    print("✓ Class overwrite working correctly")


def test_super_class_edges():
    """Test single-edge hierarchy mutations."""
    print("Testing super-class edges...")

    store = OntologyStore()
    store.add_class(make_class("animal"))
    store.add_class(make_class("pet"))
    store.add_class(make_class("dog", ["animal"]))

    assert store.add_super_class("dog", "pet")
    assert store.get_class("pet").sub_classes == {"dog"}
    assert store.add_super_class("dog", "pet")
    assert not store.add_super_class("unknown", "pet")

    assert store.remove_super_class("dog", "animal")
    assert not store.remove_super_class("dog", "animal")
    assert store.get_class("animal").sub_classes == set()
    assert store.get_ancestors("dog") == ["pet"]
    assert store.get_descendants("pet") == ["dog"]
    assert_symmetric(store)

    print("✓ Super-class edges working correctly")


def test_returned_objects_are_copies():
    """Test that mutating a returned class does not bypass the store."""
    print("Testing copies...")

    store = OntologyStore()
    store.add_class(make_class("a"))
    store.add_class(make_class("b", ["a"]))

    copy_of_a = store.get_class("a")
    copy_of_a.super_classes.add("b")
    copy_of_a.sub_classes.clear()

    assert store.get_class("a").super_classes == set()
    assert store.get_class("a").sub_classes == {"b"}

    print("✓ Returned objects are copies")


def test_delete_class():
    """Test deleting a class with links, relationships and domain memberships."""
    print("Testing delete_class...")

    store = OntologyStore()
    store.add_class(make_class("animal"))
    store.add_class(make_class("dog", ["animal"]))
    store.add_class(make_class("puppy", ["dog"]))
    store.add_class(make_class("fur"))
    store.add_relationship(OntologyRelationship.create("dog", "has-a", "fur"))
    store.add_relationship(OntologyRelationship.create("animal", "has-a", "fur"))
    store.add_property(OntologyProperty(id="has", name="has", type=PropertyType.OBJECT, domain={"dog"}, range={"fur"}))
    store.add_domain(Domain(id="general", name="General", scope="limited", concepts=["dog", "fur"]))

    assert store.delete_class("dog")
    assert not store.delete_class("dog")

    assert store.get_class("dog") is None
    assert store.get_class("animal").sub_classes == set()
    assert store.get_class("puppy").super_classes == set()
    assert [r.id for r in store.list_relationships()] == ["animal-has-a-fur"]
    assert store.get_domain("general").concepts == ["fur"]
    assert store.get_property("has").domain == set()
    assert "dog" not in store.hierarchy
    assert_symmetric(store)

    print("✓ delete_class working correctly")


def test_bidirectional_relationship_mirror():
    """Test that bidirectional relationships get a mirror."""
    print("Testing relationship mirrors...")

    store = OntologyStore()
    store.add_class(make_class("cat"))
    store.add_class(make_class("dog"))

    store.add_relationship(OntologyRelationship.create("cat", "similar-to", "dog", bidirectional=True, confidence=0.7))
    ids = [r.id for r in store.list_relationships()]
    assert ids == ["cat-similar-to-dog", "dog-similar-to-cat"]
    assert store.get_relationship("dog-similar-to-cat").confidence == 0.7

    # adding the mirror explicitly does not create a third entry
    store.add_relationship(OntologyRelationship.create("dog", "similar-to", "cat", bidirectional=True))
    assert len(store.list_relationships()) == 2

    store.add_relationship(OntologyRelationship.create("cat", "has-a", "dog"))
    assert len(store.list_relationships("has-a")) == 1
    assert len(store.get_relationships_for_class("dog")) == 3

    assert store.remove_relationship("cat-similar-to-dog")
    assert [r.id for r in store.list_relationships()] == ["cat-has-a-dog"]

    print("✓ Relationship mirrors working correctly")


def test_properties():
    """Test property insert, overwrite and removal."""
    print("Testing properties...")

    store = OntologyStore()
    store.add_class(make_class("dog"))
    store.add_class(make_class("cat"))

    store.add_property(OntologyProperty(id="hasName", name="hasName", type=PropertyType.DATATYPE, domain={"dog"}))
    assert store.get_class("dog").properties == {"hasName"}

    store.add_property(OntologyProperty(id="hasName", name="hasName", type=PropertyType.DATATYPE, domain={"cat"}))
    assert store.get_class("dog").properties == set()
    assert store.get_class("cat").properties == {"hasName"}

    assert store.remove_property("hasName")
    assert not store.remove_property("hasName")
    assert store.get_class("cat").properties == set()

    print("✓ Properties working correctly")


def test_class_hierarchy_view():
    """Test the nested hierarchy view."""
    print("Testing get_class_hierarchy...")

    store = OntologyStore()
    store.add_class(make_class("animal", instances=["Zoo"]))
    store.add_class(make_class("mammal", ["animal"]))
    store.add_class(make_class("dog", ["mammal"], description="Barks"))
    store.add_class(make_class("cat", ["mammal"]))
    store.add_class(make_class("rock"))
    store.add_class(make_class("orphan", ["missing"]))

    tree = store.get_class_hierarchy("mammal")
    assert tree["id"] == "mammal"
    assert [child["id"] for child in tree["children"]] == ["cat", "dog"]
    assert tree["children"][1]["description"] == "Barks"

    forest = store.get_class_hierarchy()
    assert [root["id"] for root in forest] == ["animal", "orphan", "rock"]
    assert forest[0]["instances"] == 1
    assert forest[0]["children"][0]["children"][0]["id"] == "cat"

    assert store.get_class_hierarchy("unknown") is None
    assert store.max_depth() == 2

    print("✓ get_class_hierarchy working correctly")


def test_deep_class_hierarchy():
    """Test the hierarchy view of a chain deeper than the recursion limit."""
    print("Testing deep get_class_hierarchy...")

    store = OntologyStore()
    store.add_class(make_class("c0"))
    for i in range(1, 1500):
        store.add_class(make_class(f"c{i}", [f"c{i - 1}"]))

    node = store.get_class_hierarchy("c0")
    depth = 0
    while node["children"]:
        node = node["children"][0]
        depth += 1
    assert depth == 1499
    assert node["id"] == "c1499"

    print("✓ deep get_class_hierarchy working correctly")


def test_neighborhood_and_similarity():
    """Test class neighborhood and lexical similarity search."""
    print("Testing neighborhood and similarity...")

    store = OntologyStore()
    store.add_class(OntologyClass(id="dog", name="Dog"))
    store.add_class(OntologyClass(id="domestic_dog", name="DomesticDog", super_classes={"dog"}))
    store.add_class(OntologyClass(id="car", name="Car"))
    store.add_class(OntologyClass(id="fur", name="Fur"))
    store.add_relationship(OntologyRelationship.create("dog", "has-a", "fur"))

    neighborhood = store.get_class_neighborhood("dog")
    assert [c.id for c in neighborhood.sub_classes] == ["domestic_dog"]
    assert list(neighborhood.related_classes) == ["fur"]
    assert store.get_class_neighborhood("unknown") is None

    similar = store.find_similar_classes("dog")
    assert [s.class_info.id for s in similar] == ["domestic_dog"]
    assert 0.3 <= similar[0].similarity_score <= 1.0
    assert store.find_similar_classes("unknown") == []

    print("✓ Neighborhood and similarity working correctly")


def test_statistics():
    """Test the statistics report."""
    print("Testing statistics...")

    store = OntologyStore()
    store.add_class(make_class("animal", description="Living being"))
    store.add_class(make_class("dog", ["animal"], instances=["Dogs"]))
    store.add_property(OntologyProperty(id="has", name="has", type=PropertyType.OBJECT, domain={"dog"}, range={"animal"}))
    store.add_property(OntologyProperty(id="hasName", name="hasName", type=PropertyType.DATATYPE, domain={"dog"}))
    store.add_relationship(OntologyRelationship.create("dog", "related-to", "animal", bidirectional=True))

    stats = store.get_statistics()
    assert stats.total_classes == 2
    assert stats.total_object_properties == 1
    assert stats.total_datatype_properties == 1
    assert stats.total_relationships == 2
    assert stats.root_classes == 1
    assert stats.max_depth == 1
    assert stats.classes_with_descriptions == 1
    assert stats.classes_with_instances == 1
    assert stats.properties_with_domain_range == 1
    assert stats.classes_by_provenance == {"manual": 2}

    print("✓ Statistics working correctly")


def test_validate_and_export_delegation():
    """Test that validation and export run over the store contents."""
    print("Testing validation and export delegation...")

    store = OntologyStore()
    store.add_class(OntologyClass(id="animal", name="Animal"))
    store.add_class(OntologyClass(id="dog", name="Dog", super_classes={"animal"}, instances=["Dogs"]))

    result = store.validate_ontology()
    assert result.valid
    assert 0.0 <= result.metrics.completeness <= 1.0

    export = store.export_to_format("turtle")
    assert export.format == "turtle"
    assert "Animal" in export.content
    assert export.metadata["classes"] == 2
    assert export.metadata["validation"]["valid"] is True

    print("✓ Validation and export delegation working correctly")


def test_clear():
    store = OntologyStore()
    store.add_class(make_class("a"))
    store.add_class(make_class("b", ["a"]))
    store.clear()
    assert store.list_classes() == []
    assert store.hierarchy.number_of_nodes() == 0


def run_all_tests():
    """Run all tests and report results."""
    print("Running OntologyStore tests...")
    print("=" * 50)

    test_functions = [
        test_empty_store,
        test_add_class_maintains_sub_classes,
        test_cycle_rejected_without_changes,
        test_self_reference_on_new_class_rejected,
        test_overwrite_class_replaces_links,
        test_super_class_edges,
        test_returned_objects_are_copies,
        test_delete_class,
        test_bidirectional_relationship_mirror,
        test_properties,
        test_class_hierarchy_view,
        test_deep_class_hierarchy,
        test_neighborhood_and_similarity,
        test_statistics,
        test_validate_and_export_delegation,
        test_clear,
    ]

    passed = 0
    failed = 0

    for test_func in test_functions:
        try:
            test_func()
            passed += 1
        except Exception as e:
            print(f"✗ {test_func.__name__} FAILED: {e}")
            failed += 1

    print("=" * 50)
    print(f"Test Results: {passed} passed, {failed} failed")
    print("=" * 50)

    return failed == 0


def main():
    """Main function to run the tests."""
    success = run_all_tests()
    if success:
        print("All tests passed!")
        return 0
    else:
        print("Some tests failed!")
        return 1


if __name__ == "__main__":
    exit(main())
