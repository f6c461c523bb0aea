import pytest


@pytest.fixture
def animal_corpus():
    """Two short documents about dogs and cats, both tagged 'animal'."""
    return [
        {"title": "Dogs", "text": "Dogs are mammals. Dogs have fur.", "tags": ["animal"]},
        {"title": "Cats", "text": "Cats are mammals.", "tags": ["animal"]},
    ]
