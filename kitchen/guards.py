"""Actor, role, ownership and duplicate-title checks shared by the handlers.

Inventory is a shared pantry: those handlers only call ``resolve_actor``.
Any existing user may read, update or delete any item.
"""

from typing import Optional

from sqlalchemy.orm import Session

from . import crud, models
from .errors import BadRequest, Forbidden, NotFound

VIEW_RECIPES_DENIED = "Only chefs can view recipes"
MANAGE_RECIPES_DENIED = "Only chefs can manage recipes"
NOT_OWNER = "You do not own this recipe"
DUPLICATE_TITLE = "A recipe with this title already exists for this chef"


def resolve_actor(db: Session, user_id: Optional[str]) -> models.User:
    actor = crud.get_user(db, user_id)
    if not actor:
        raise NotFound("User not found")
    return actor


def require_chef(actor: models.User, message: str = MANAGE_RECIPES_DENIED):
    if not actor.is_chef:
        raise Forbidden(message)


def require_owner(recipe: models.Recipe, user_id: str):
    if str(recipe.owner_id) != str(user_id):
        raise Forbidden(NOT_OWNER)


def ensure_unique_title(db: Session, chef: str, title: str, exclude_id: Optional[int] = None):
    if crud.find_duplicate_recipe(db, chef, title, exclude_id=exclude_id):
        raise BadRequest(DUPLICATE_TITLE)


def load_chef(db: Session, user_id: Optional[str], message: str = MANAGE_RECIPES_DENIED) -> models.User:
    actor = resolve_actor(db, user_id)
    require_chef(actor, message)
    return actor


def load_owned_recipe(db: Session, user_id: Optional[str], recipe_id: Optional[str]) -> models.Recipe:
    load_chef(db, user_id)
    recipe = crud.get_recipe(db, recipe_id)
    if not recipe:
        raise NotFound("Recipe not found")
    require_owner(recipe, user_id)
    return recipe
