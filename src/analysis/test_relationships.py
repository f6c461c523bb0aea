"""
Tests for relationship extraction and consolidation.
"""

import pytest

from .concepts import ConceptExtractor
from .domain import Concept, ConceptKind, RelationshipCandidate
from .relationships import (
    RelationshipExtractor,
    find_relationship_chains,
    relationships_for_concept,
    relationships_of_type,
    strongest_relationships,
)


def concept(name: str) -> Concept:
    return Concept(name=name, kind=ConceptKind.ABSTRACT, frequency=2, confidence=0.5, contexts=[])


@pytest.fixture
def extractor():
    return RelationshipExtractor()


def triples(relationships):
    return {(r.source, r.type, r.target) for r in relationships}


def test_animal_corpus_relationships(extractor, animal_corpus):
    concepts = ConceptExtractor().extract(animal_corpus)
    relationships = extractor.extract(animal_corpus, concepts)

    found = triples(relationships)
    assert ("dog", "is-a", "mammal") in found
    assert ("cat", "is-a", "mammal") in found
    assert ("dog", "has-a", "fur") in found

    is_a = next(r for r in relationships if r.key == ("dog", "is-a", "mammal"))
    assert is_a.strength == pytest.approx(0.8)
    assert is_a.confidence == pytest.approx(0.6)
    assert is_a.evidence == ['From "Dogs": Dogs are mammals']
    assert not is_a.bidirectional


def test_consolidation(extractor):
    docs = [{"title": f"Doc {i}", "text": "Dogs have fur."} for i in range(3)]
    relationships = extractor.extract(docs, [concept("dog"), concept("fur")])

    assert len(relationships) == 1
    rel = relationships[0]
    assert rel.key == ("dog", "has-a", "fur")
    assert rel.strength == pytest.approx(min(1.0, 0.7 + 0.1 * 2))
    assert len(rel.evidence) == 3
    assert rel.confidence == pytest.approx(0.6)


def test_strength_is_capped(extractor):
    docs = [{"title": f"Doc {i}", "text": "Dogs are a kind of mammal."} for i in range(4)]
    relationships = extractor.extract(docs, [concept("dog"), concept("mammal")])
    assert relationships[0].type == "is-a"
    assert relationships[0].strength == 1.0


def test_weak_cooccurrence_dropped(extractor):
    docs = [{"title": "Pets", "text": "Dogs and cats play together."}]
    assert extractor.extract(docs, [concept("dog"), concept("cat")]) == []


def test_repeated_cooccurrence_is_mirrored(extractor):
    docs = [
        {"title": "Pets", "text": "Dogs and cats play together."},
        {"title": "More pets", "text": "Cats and dogs sleep a lot."},
    ]
    relationships = extractor.extract(docs, [concept("dog"), concept("cat")])

    assert triples(relationships) == {("cat", "related-to", "dog"), ("dog", "related-to", "cat")}
    assert all(r.bidirectional for r in relationships)
    assert all(r.strength == pytest.approx(0.4) for r in relationships)
    assert all(len(r.evidence) == 2 for r in relationships)


def test_similarity_is_bidirectional(extractor):
    docs = [{"title": "Pets", "text": "Cats are similar to dogs."}]
    relationships = extractor.extract(docs, [concept("dog"), concept("cat")])
    assert triples(relationships) == {("cat", "similar-to", "dog"), ("dog", "similar-to", "cat")}


def test_whole_word_matching(extractor):
    docs = [{"title": "Misc", "text": "Every category needs a dog."}]
    assert extractor.extract(docs, [concept("cat"), concept("dog")]) == []


def test_short_fragments_ignored(extractor):
    docs = [{"title": "Tiny", "text": "Dog vs fur. Dog vs fur."}]
    assert extractor.extract(docs, [concept("dog"), concept("fur")]) == []


def test_multi_word_concepts(extractor):
    docs = [{"title": "AI", "text": "Machine learning is part of artificial intelligence."}]
    concepts = [concept("machine learning"), concept("artificial intelligence"), concept("learning")]
    found = triples(extractor.extract(docs, concepts))
    assert ("machine learning", "part-of", "artificial intelligence") in found
    assert ("learning", "part-of", "artificial intelligence") in found
    assert not any(s == "machine learning" and t == "learning" for s, _, t in found)


def test_classify_order(extractor):
    assert extractor.classify(" is part of ") == ("part-of", 0.8)
    assert extractor.classify(" is a kind of ") == ("is-a", 0.9)
    assert extractor.classify(" are ") == ("is-a", 0.8)
    assert extractor.classify(" leads to ") == ("causes", 0.8)
    assert extractor.classify(" and ") == ("related-to", 0.3)


def make_rel(source, target, confidence, rel_type="causes"):
    return RelationshipCandidate(source=source, target=target, type=rel_type, strength=0.8, confidence=confidence)


def test_relationship_chains():
    rels = [make_rel("a", "b", 0.8), make_rel("b", "c", 0.5), make_rel("c", "a", 0.9), make_rel("b", "d", 0.9)]
    chains = find_relationship_chains(rels, "a")

    assert [c.concepts for c in chains] == [["a", "b", "d"], ["a", "b", "c"]]
    assert chains[0].confidence == pytest.approx(0.72)
    assert chains[1].length == 2

    assert find_relationship_chains(rels, "a", max_depth=1) == []


def test_relationship_filters():
    rels = [make_rel("a", "b", 0.8), make_rel("b", "c", 0.5, "uses"), make_rel("c", "d", 0.9)]
    assert len(relationships_of_type(rels, "causes")) == 2
    assert [r.key for r in relationships_for_concept(rels, "b")] == [("a", "causes", "b"), ("b", "uses", "c")]
    assert [r.source for r in strongest_relationships(rels, 2)] == ["c", "a"]
