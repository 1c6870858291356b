from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from . import ids, models, schemas
from .models import utcnow
from .normalize import normalize_email, normalize_title


# --- Users ---

def get_user(db: Session, user_id: Optional[str]):
    if not user_id:
        return None
    return db.query(models.User).filter(models.User.user_id == user_id).first()


def get_user_by_email(db: Session, email: str):
    return db.query(models.User).filter(models.User.email == normalize_email(email)).first()


def create_user(db: Session, user: schemas.UserRegister):
    db_user = models.User(
        user_id=ids.next_id(db, "user"),
        fullname=user.fullname,
        email=user.email,
        password=user.password,
        role=user.role.value,
        phone=user.phone,
        created_date=utcnow(),
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def count_users(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(models.User))


# --- Recipes ---

def get_recipe(db: Session, recipe_id: Optional[str]):
    if not recipe_id:
        return None
    return db.query(models.Recipe).filter(models.Recipe.recipe_id == recipe_id).first()


def get_recipes(db: Session, owner_id: Optional[str] = None):
    q = db.query(models.Recipe)
    if owner_id:
        q = q.filter(models.Recipe.owner_id == owner_id)
    return q.order_by(models.Recipe.created_date.desc(), models.Recipe.id.desc()).all()


def find_duplicate_recipe(db: Session, chef: str, title: str, exclude_id: Optional[int] = None):
    """Case-insensitive exact match on (chef, title)."""
    q = db.query(models.Recipe).filter(
        models.Recipe.chef_key == normalize_title(chef),
        models.Recipe.title_key == normalize_title(title),
    )
    if exclude_id is not None:
        q = q.filter(models.Recipe.id != exclude_id)
    return q.first()


def create_recipe(db: Session, recipe: schemas.RecipeCreate, user_id: str):
    db_recipe = models.Recipe(
        recipe_id=ids.next_id(db, "recipe"),
        user_id=user_id,
        owner_id=user_id,
        title=recipe.title,
        chef=recipe.chef,
        ingredients=list(recipe.ingredients or []),
        instructions=list(recipe.instructions or []),
        meal_type=recipe.meal_type,
        cuisine_type=recipe.cuisine_type,
        prep_time=recipe.prep_time,
        difficulty=recipe.difficulty,
        servings=recipe.servings,
        created_date=utcnow(),
    )
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def update_recipe(db: Session, db_recipe: models.Recipe, changes: Dict[str, Any]):
    for field, value in changes.items():
        setattr(db_recipe, field, value)
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def delete_recipe(db: Session, db_recipe: models.Recipe):
    db.delete(db_recipe)
    db.commit()


def count_recipes(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(models.Recipe))


# --- Inventory ---

def get_item(db: Session, inventory_id: str):
    return (
        db.query(models.InventoryItem)
        .filter(models.InventoryItem.inventory_id == inventory_id)
        .first()
    )


def get_items(db: Session):
    return (
        db.query(models.InventoryItem)
        .order_by(models.InventoryItem.created_date.desc(), models.InventoryItem.id.desc())
        .all()
    )


def create_item(db: Session, item: schemas.InventoryCreate, user_id: str):
    db_item = models.InventoryItem(
        inventory_id=ids.next_id(db, "inventory"),
        user_id=user_id,
        added_by=user_id,
        ingredient_name=item.ingredient_name,
        quantity=item.quantity,
        unit=item.unit,
        category=item.category,
        purchase_date=item.purchase_date,
        expiration_date=item.expiration_date,
        location=item.location,
        cost=item.cost,
        created_date=utcnow(),
    )
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def update_item(db: Session, inventory_id: str, changes: Dict[str, Any]):
    db_item = get_item(db, inventory_id)
    if not db_item:
        return None
    for field, value in changes.items():
        setattr(db_item, field, value)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def delete_item(db: Session, inventory_id: str):
    db_item = get_item(db, inventory_id)
    if not db_item:
        return False
    db.delete(db_item)
    db.commit()
    return True


def count_items(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(models.InventoryItem))
