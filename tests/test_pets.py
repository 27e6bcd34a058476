"""Tests for the in-memory favorite-pets store."""

import pytest

from petbot import pets


def test_list_unknown_user_is_empty():
    assert pets.list_favorite_pets("nobody") == []


def test_update_then_list():
    pets.update_favorite_pets("brace", ["cat", "dog"])
    assert pets.list_favorite_pets("brace") == ["cat", "dog"]


def test_update_replaces_previous_list():
    pets.update_favorite_pets("brace", ["cat", "dog"])
    pets.update_favorite_pets("brace", ["parrot"])
    assert pets.list_favorite_pets("brace") == ["parrot"]


def test_stored_list_is_a_copy():
    given = ["cat"]
    pets.update_favorite_pets("brace", given)
    given.append("dog")
    listed = pets.list_favorite_pets("brace")
    listed.append("fish")
    assert pets.list_favorite_pets("brace") == ["cat"]


def test_delete_removes_entry():
    pets.update_favorite_pets("brace", ["cat"])
    pets.delete_favorite_pets("brace")
    assert "brace" not in pets.user_to_pets
    assert pets.list_favorite_pets("brace") == []


def test_delete_unknown_user_is_noop():
    pets.update_favorite_pets("other", ["cat"])
    pets.delete_favorite_pets("nobody")
    assert pets.user_to_pets == {"other": ["cat"]}


@pytest.mark.parametrize("bad", [[1, 2], "dog", ("cat",), ["cat", None]])
def test_update_rejects_non_string_lists(bad):
    pets.update_favorite_pets("brace", ["cat"])
    with pytest.raises(TypeError, match="list of strings"):
        pets.update_favorite_pets("brace", bad)
    assert pets.list_favorite_pets("brace") == ["cat"]
