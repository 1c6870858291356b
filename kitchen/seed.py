import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError
from sqlalchemy.orm import Session

from . import crud, schemas


def load_seed(path):
    """Load seed data from a JSON file.

    Args:
        path (str or Path): Path to the JSON file.

    Returns:
        dict: ``users``, ``recipes`` and ``inventory`` lists (missing keys
        become empty lists).
    """
    p = Path(path)
    if not p.exists():
        return {"users": [], "recipes": [], "inventory": []}
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return {key: data.get(key, []) for key in ("users", "recipes", "inventory")}


def import_seed(db: Session, data: dict) -> dict:
    """Insert seed records through the same crud layer the API uses.

    Users are matched by email and recipes by (chef, title); existing ones
    are skipped. Recipes and inventory reference their owner by email so the
    file does not need to know generated ids.
    """
    added = {"users": 0, "recipes": 0, "inventory": 0}
    by_email = {}

    for raw in data.get("users", []):
        try:
            user_in = schemas.UserRegister.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Skipping user {raw.get('email')!r}: {e.errors()[0]['msg']}")
            continue
        user = crud.get_user_by_email(db, user_in.email)
        if not user:
            user = crud.create_user(db, user_in)
            added["users"] += 1
        by_email[user.email] = user

    for raw in data.get("recipes", []):
        owner = by_email.get(raw.get("ownerEmail")) or crud.get_user_by_email(db, raw.get("ownerEmail", ""))
        if not owner or not owner.is_chef:
            logger.warning(f"Skipping recipe {raw.get('title')!r}: owner is not a chef")
            continue
        try:
            recipe_in = schemas.RecipeCreate.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Skipping recipe {raw.get('title')!r}: {e.errors()[0]['msg']}")
            continue
        if crud.find_duplicate_recipe(db, recipe_in.chef, recipe_in.title):
            continue
        crud.create_recipe(db, recipe_in, owner.user_id)
        added["recipes"] += 1

    for raw in data.get("inventory", []):
        owner = by_email.get(raw.get("ownerEmail")) or crud.get_user_by_email(db, raw.get("ownerEmail", ""))
        if not owner:
            logger.warning(f"Skipping inventory {raw.get('ingredientName')!r}: unknown owner")
            continue
        try:
            item_in = schemas.InventoryCreate.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Skipping inventory {raw.get('ingredientName')!r}: {e.errors()[0]['msg']}")
            continue
        crud.create_item(db, item_in, owner.user_id)
        added["inventory"] += 1

    return added
