"""Favorite-pet tools, bound to a user the model never sees.

Two ways to bind the user:

* generate_tools_for_user(user_id) builds fresh closures per request, each
  capturing user_id.
* INJECTED_PET_TOOLS are built once; they declare user_id as an injected
  parameter and the request's ToolRegistry fills it in at call time.
"""
from petbot import pets as pet_store
from petbot.tools.base import Tool, make_tool

UPDATE_PETS_PARAMETERS = {
    "type": "object",
    "properties": {
        "pets": {
            "type": "array",
            "items": {"type": "string"},
            "description": "The full list of the user's favorite pets, in the order the user gave them. Replaces any previous list.",
        },
    },
    "required": ["pets"],
}
NO_PARAMETERS = {"type": "object", "properties": {}, "required": []}

UPDATE_DESCRIPTION = "Save the user's list of favorite pets. Call this when the user tells you which pets they like."
DELETE_DESCRIPTION = "Forget all of the user's favorite pets. Call this when the user asks you to clear or delete them."
LIST_DESCRIPTION = "Return the user's saved favorite pets. Returns an empty list if none are saved."


def _saved(pet_names: list[str]) -> str:
    return f"Saved favorite pets: {', '.join(pet_names)}." if pet_names else "Saved an empty list of favorite pets."


def generate_tools_for_user(user_id: str) -> list[Tool]:
    """Return update/delete/list tools that act on user_id only."""

    def update_favorite_pets(pets: list[str]) -> str:
        return _saved(pet_store.update_favorite_pets(user_id, pets))

    def delete_favorite_pets() -> str:
        pet_store.delete_favorite_pets(user_id)
        return "Deleted favorite pets."

    def list_favorite_pets() -> list[str]:
        return pet_store.list_favorite_pets(user_id)

    return [
        make_tool("update_favorite_pets", UPDATE_DESCRIPTION, UPDATE_PETS_PARAMETERS, update_favorite_pets),
        make_tool("delete_favorite_pets", DELETE_DESCRIPTION, NO_PARAMETERS, delete_favorite_pets),
        make_tool("list_favorite_pets", LIST_DESCRIPTION, NO_PARAMETERS, list_favorite_pets),
    ]


def _update_injected(pets: list[str], user_id: str) -> str:
    return _saved(pet_store.update_favorite_pets(user_id, pets))


def _delete_injected(user_id: str) -> str:
    pet_store.delete_favorite_pets(user_id)
    return "Deleted favorite pets."


def _list_injected(user_id: str) -> list[str]:
    return pet_store.list_favorite_pets(user_id)


INJECTED_PET_TOOLS: list[Tool] = [
    make_tool("update_favorite_pets", UPDATE_DESCRIPTION, UPDATE_PETS_PARAMETERS, _update_injected, injected=("user_id",)),
    make_tool("delete_favorite_pets", DELETE_DESCRIPTION, NO_PARAMETERS, _delete_injected, injected=("user_id",)),
    make_tool("list_favorite_pets", LIST_DESCRIPTION, NO_PARAMETERS, _list_injected, injected=("user_id",)),
]
