from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import Role
from .normalize import to_ingredient_list, to_instruction_list


class CamelModel(BaseModel):
    # Wire format is camelCase (userId, mealType, ...); attributes stay snake_case
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


# --- Users ---

class UserRegister(CamelModel):
    fullname: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)
    role: Role = Role.USER
    phone: Optional[str] = Field(default=None, max_length=50)

    @field_validator("fullname")
    @classmethod
    def strip_fullname(cls, v):
        return _strip_required(v)


class UserLogin(CamelModel):
    email: str
    password: str


class UserPublic(CamelModel):
    """A user as sent to the client. The password never leaves the server."""

    user_id: str
    fullname: str
    email: str
    role: str
    phone: Optional[str] = None
    created_date: Optional[datetime] = None


# --- Recipes ---

class RecipeCreate(CamelModel):
    user_id: Optional[str] = None
    title: str = Field(
        ..., max_length=200, json_schema_extra={"example": "Simple Pancakes"}
    )
    chef: str = Field(..., max_length=200, json_schema_extra={"example": "Alice"})
    ingredients: List[Any] = Field(
        default_factory=list,
        json_schema_extra={"example": ["200g flour", "300ml milk", "1 egg"]},
    )
    instructions: List[str] = Field(
        default_factory=list,
        json_schema_extra={
            "example": [
                "Mix dry ingredients",
                "Add wet ingredients",
                "Cook on skillet until golden",
            ]
        },
    )
    meal_type: Optional[str] = Field(default=None, max_length=50)
    cuisine_type: Optional[str] = Field(default=None, max_length=50)
    prep_time: Optional[int] = Field(default=None, ge=0)
    difficulty: Optional[str] = Field(default=None, max_length=50)
    servings: Optional[int] = Field(default=None, ge=1)

    @field_validator("title", "chef")
    @classmethod
    def strip_required(cls, v):
        return _strip_required(v)

    @field_validator("ingredients", mode="before")
    @classmethod
    def normalize_ingredients(cls, v):
        return to_ingredient_list(v)

    @field_validator("instructions", mode="before")
    @classmethod
    def normalize_instructions(cls, v):
        return to_instruction_list(v)


class RecipeUpdate(CamelModel):
    """Partial update: only the fields present in the request are applied."""

    user_id: Optional[str] = None
    recipe_id: Optional[str] = None
    title: Optional[str] = Field(default=None, max_length=200)
    chef: Optional[str] = Field(default=None, max_length=200)
    ingredients: Optional[List[Any]] = None
    instructions: Optional[List[str]] = None
    meal_type: Optional[str] = Field(default=None, max_length=50)
    cuisine_type: Optional[str] = Field(default=None, max_length=50)
    prep_time: Optional[int] = Field(default=None, ge=0)
    difficulty: Optional[str] = Field(default=None, max_length=50)
    servings: Optional[int] = Field(default=None, ge=1)

    @field_validator("title", "chef")
    @classmethod
    def not_blank(cls, v):
        if v is None:
            return v
        return _strip_required(v)

    @field_validator("ingredients", mode="before")
    @classmethod
    def normalize_ingredients(cls, v):
        if v is None:
            return v
        return to_ingredient_list(v)

    @field_validator("instructions", mode="before")
    @classmethod
    def normalize_instructions(cls, v):
        if v is None:
            return v
        return to_instruction_list(v)

    def changes(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True, exclude_none=True)
        data.pop("user_id", None)
        data.pop("recipe_id", None)
        return data


class Recipe(CamelModel):
    recipe_id: str
    user_id: str
    owner_id: str
    title: str
    chef: str
    ingredients: List[Any] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    meal_type: Optional[str] = None
    cuisine_type: Optional[str] = None
    prep_time: Optional[int] = None
    difficulty: Optional[str] = None
    servings: Optional[int] = None
    created_date: Optional[datetime] = None


# --- Inventory ---

class InventoryCreate(CamelModel):
    user_id: Optional[str] = None
    ingredient_name: str = Field(
        ..., max_length=200, json_schema_extra={"example": "Flour"}
    )
    quantity: float = Field(..., ge=0)
    unit: str = Field(..., max_length=50, json_schema_extra={"example": "kg"})
    category: Optional[str] = Field(default=None, max_length=100)
    purchase_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, max_length=100)
    cost: Optional[float] = Field(default=None, ge=0)

    @field_validator("ingredient_name", "unit")
    @classmethod
    def strip_required(cls, v):
        return _strip_required(v)


class InventoryUpdate(CamelModel):
    user_id: Optional[str] = None
    ingredient_name: Optional[str] = Field(default=None, max_length=200)
    quantity: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = Field(default=None, max_length=50)
    category: Optional[str] = Field(default=None, max_length=100)
    purchase_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    location: Optional[str] = Field(default=None, max_length=100)
    cost: Optional[float] = Field(default=None, ge=0)

    @field_validator("ingredient_name", "unit")
    @classmethod
    def not_blank(cls, v):
        if v is None:
            return v
        return _strip_required(v)

    def changes(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True, exclude_none=True)
        data.pop("user_id", None)
        return data


class InventoryItem(CamelModel):
    inventory_id: str
    user_id: str
    added_by: str
    ingredient_name: str
    quantity: float
    unit: str
    category: Optional[str] = None
    purchase_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    location: Optional[str] = None
    cost: Optional[float] = None
    created_date: Optional[datetime] = None
