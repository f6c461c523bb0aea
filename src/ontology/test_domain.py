"""
Unit test for the ontology domain models.

HOW TO RUN:
The virtual environment .venv should be activated before running the tests.

From the src directory, run:
    python -m ontology.test_domain

Or from the project root:
    cd src; python -m ontology.test_domain
"""

from .domain import (
    Cardinality,
    ClassMetadata,
    OntologyClass,
    OntologyRelationship,
    Provenance,
    class_name,
    property_name,
    slugify,
)


def test_slugify():
    """Test class id derivation."""
    print("Testing slugify...")

    assert slugify("Machine Learning") == "machine_learning"
    assert slugify("e-mail") == "e_mail"
    assert slugify("dog") == "dog"
    assert slugify("DogBreed") == "dog_breed"
    assert slugify("HTTPServer") == "httpserver"

    # display names map back to the id of the term they were made from
    for term in ["dog breed", "machine learning", "state-of-the-art", "dog"]:
        assert slugify(class_name(term)) == slugify(term)

    print("✓ slugify working correctly")


def test_naming_helpers():
    """Test PascalCase and camelCase conversion."""
    print("Testing naming helpers...")

    assert class_name("machine learning") == "MachineLearning"
    assert class_name("state-of-the-art") == "StateOfTheArt"
    assert class_name("dog") == "Dog"
    assert property_name("part of") == "partOf"
    assert property_name("HasName") == "hasName"

    print("✓ Naming helpers working correctly")


def test_cardinality():
    """Test cardinality validity."""
    print("Testing Cardinality...")

    assert Cardinality().is_valid()
    assert Cardinality().unbounded
    assert Cardinality(min=1, max=1).is_valid()
    assert not Cardinality(min=-1).is_valid()
    assert not Cardinality(min=2, max=1).is_valid()
    assert str(Cardinality(min=0, max=None)) == "[0..*]"
    assert str(Cardinality(min=1, max=3)) == "[1..3]"

    print("✓ Cardinality working correctly")


def test_ontology_class_defaults():
    """Test OntologyClass creation."""
    print("Testing OntologyClass creation...")

    cls = OntologyClass.create("Machine Learning", description="Learning from data")
    assert cls.id == "machine_learning"
    assert cls.super_classes == set()
    assert cls.sub_classes == set()
    assert cls.metadata.provenance == Provenance.MANUAL
    assert cls.metadata.confidence == 1.0
    assert cls.metadata.kind is None

    other = OntologyClass(id="x", name="X", metadata=ClassMetadata(provenance=Provenance.EXTRACTED, kind="entity"))
    assert other.metadata.kind == "entity"
    # mutable defaults are not shared
    cls.super_classes.add("y")
    assert other.super_classes == set()

    print("✓ OntologyClass creation working correctly")


def test_relationship_ids_and_mirror():
    """Test deterministic relationship ids and mirrors."""
    print("Testing OntologyRelationship...")

    rel = OntologyRelationship.create("cat", "similar-to", "dog", bidirectional=True, properties={"strength": 0.6})
    assert rel.id == "cat-similar-to-dog"

    mirror = rel.mirror()
    assert mirror.id == "dog-similar-to-cat"
    assert (mirror.source, mirror.target) == ("dog", "cat")
    assert mirror.bidirectional
    mirror.properties["strength"] = 0.1
    assert rel.properties["strength"] == 0.6

    print("✓ OntologyRelationship working correctly")


def run_all_tests():
    """Run all tests and report results."""
    print("Running ontology domain tests...")
    print("=" * 50)

    test_functions = [
        test_slugify,
        test_naming_helpers,
        test_cardinality,
        test_ontology_class_defaults,
        test_relationship_ids_and_mirror,
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


if __name__ == "__main__":
    exit(0 if run_all_tests() else 1)
