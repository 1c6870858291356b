from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from loguru import logger
from sqlalchemy.orm import Session

from . import config, crud, guards, schemas
from .db import SessionLocal, init_db
from .errors import Conflict, NotFound, Unauthorized, register_exception_handlers
from .logger import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize DB once at startup
    init_db()
    logger.info(f"Serving frontend from {config.STATIC_DIR}")
    yield


setup_logging(config.LOG_LEVEL)

app = FastAPI(title="Cloud Kitchen", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_static_dir() -> Path:
    return config.STATIC_DIR


def user_out(user):
    return schemas.UserPublic.model_validate(user)


def recipe_out(recipe):
    return schemas.Recipe.model_validate(recipe)


def item_out(item):
    return schemas.InventoryItem.model_validate(item)


@app.get("/health")
def health():
    return {"ok": True}


# --- Users ---

@app.get("/me")
def me(userId: Optional[str] = None, db: Session = Depends(get_db)):
    user = crud.get_user(db, userId)
    if not user:
        raise NotFound("User not found")
    return {"ok": True, "user": user_out(user)}


@app.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserRegister, db: Session = Depends(get_db)):
    if crud.get_user_by_email(db, payload.email):
        raise Conflict("Email already registered")
    user = crud.create_user(db, payload)
    logger.info(f"Registered {user.user_id} ({user.role})")
    return {"ok": True, "message": "User registered successfully", "userId": user.user_id}


@app.post("/login")
def login(payload: schemas.UserLogin, db: Session = Depends(get_db)):
    user = crud.get_user_by_email(db, payload.email)
    # plain-text comparison, passwords are stored as given
    if not user or user.password != payload.password:
        raise Unauthorized("Invalid credentials")
    logger.info(f"Login {user.user_id}")
    return {"ok": True, "message": "Login successful", "user": user_out(user)}


@app.get("/stats")
def stats(db: Session = Depends(get_db)):
    return {
        "ok": True,
        "recipes": crud.count_recipes(db),
        "inventory": crud.count_items(db),
        "users": crud.count_users(db),
    }


# --- Recipes (chef only) ---

@app.get("/view-recipes")
def view_recipes(
    userId: Optional[str] = None,
    ownerId: Optional[str] = None,
    db: Session = Depends(get_db),
):
    guards.load_chef(db, userId, guards.VIEW_RECIPES_DENIED)
    recipes = crud.get_recipes(db, owner_id=ownerId)
    return {"ok": True, "recipes": [recipe_out(r) for r in recipes]}


@app.post("/add-recipe", status_code=status.HTTP_201_CREATED)
def add_recipe(payload: schemas.RecipeCreate, db: Session = Depends(get_db)):
    actor = guards.load_chef(db, payload.user_id)
    guards.ensure_unique_title(db, payload.chef, payload.title)
    recipe = crud.create_recipe(db, payload, actor.user_id)
    logger.info(f"{actor.user_id} added recipe {recipe.recipe_id} '{recipe.title}'")
    return {"ok": True, "recipe": recipe_out(recipe)}


@app.put("/edit-recipe")
def edit_recipe(payload: schemas.RecipeUpdate, db: Session = Depends(get_db)):
    recipe = guards.load_owned_recipe(db, payload.user_id, payload.recipe_id)
    changes = payload.changes()
    if "title" in changes or "chef" in changes:
        guards.ensure_unique_title(
            db,
            changes.get("chef", recipe.chef),
            changes.get("title", recipe.title),
            exclude_id=recipe.id,
        )
    recipe = crud.update_recipe(db, recipe, changes)
    logger.info(f"{payload.user_id} edited recipe {recipe.recipe_id}: {sorted(changes)}")
    return {"ok": True, "recipe": recipe_out(recipe)}


@app.delete("/delete-recipe/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(recipe_id: str, userId: Optional[str] = None, db: Session = Depends(get_db)):
    recipe = guards.load_owned_recipe(db, userId, recipe_id)
    crud.delete_recipe(db, recipe)
    logger.info(f"{userId} deleted recipe {recipe_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Inventory (shared pantry, any existing user) ---

@app.get("/inventory")
def list_inventory(userId: Optional[str] = None, db: Session = Depends(get_db)):
    guards.resolve_actor(db, userId)
    items = crud.get_items(db)
    return {"ok": True, "inventory": [item_out(i) for i in items]}


@app.get("/inventory/{inventory_id}")
def get_inventory_item(inventory_id: str, userId: Optional[str] = None, db: Session = Depends(get_db)):
    guards.resolve_actor(db, userId)
    item = crud.get_item(db, inventory_id)
    if not item:
        raise NotFound("Inventory item not found")
    return {"ok": True, "item": item_out(item)}


@app.post("/inventory", status_code=status.HTTP_201_CREATED)
def create_inventory_item(payload: schemas.InventoryCreate, db: Session = Depends(get_db)):
    actor = guards.resolve_actor(db, payload.user_id)
    item = crud.create_item(db, payload, actor.user_id)
    logger.info(f"{actor.user_id} added inventory {item.inventory_id} '{item.ingredient_name}'")
    return {"ok": True, "item": item_out(item)}


@app.put("/inventory/{inventory_id}")
def update_inventory_item(
    inventory_id: str, payload: schemas.InventoryUpdate, db: Session = Depends(get_db)
):
    guards.resolve_actor(db, payload.user_id)
    item = crud.update_item(db, inventory_id, payload.changes())
    if not item:
        raise NotFound("Inventory item not found")
    logger.info(f"{payload.user_id} updated inventory {inventory_id}")
    return {"ok": True, "item": item_out(item)}


@app.delete("/inventory/{inventory_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(inventory_id: str, userId: Optional[str] = None, db: Session = Depends(get_db)):
    guards.resolve_actor(db, userId)
    if not crud.delete_item(db, inventory_id):
        raise NotFound("Inventory item not found")
    logger.info(f"{userId} deleted inventory {inventory_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Angular SPA: registered last so it never shadows an API route ---

@app.get("/{full_path:path}", include_in_schema=False)
def spa(full_path: str, static_dir: Path = Depends(get_static_dir)):
    root = static_dir.resolve()
    if full_path:
        candidate = (root / full_path).resolve()
        # refuse anything that escapes the build directory
        if candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(str(candidate))
    index = root / "index.html"
    if index.is_file():
        return FileResponse(str(index), media_type="text/html")
    return JSONResponse(status_code=404, content={"ok": False, "error": "Frontend build not found"})
