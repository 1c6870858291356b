"""
Human-readable sequential ids: ``U-00001``, ``R-00042``, ``I-00107``.

Numbers come from one ``IdSequence`` row per prefix, bumped with a single
``UPDATE ... SET last_value = last_value + 1``. The row lock taken by that
update is held until the caller commits, so two requests can never be handed
the same number. The unique index on each id column stays as a backstop.
"""

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from . import models

PAD = 5

PREFIXES = {
    "user": "U",
    "recipe": "R",
    "inventory": "I",
}

# prefix -> the id column it numbers
_ID_COLUMNS = {
    "U": models.User.user_id,
    "R": models.Recipe.recipe_id,
    "I": models.InventoryItem.inventory_id,
}


def format_id(prefix: str, number: int) -> str:
    return f"{prefix}-{number:0{PAD}d}"


def parse_id(value: str) -> int:
    """Return the numeric part of ``X-#####``; raise ValueError if malformed."""
    if not value or len(value) < 3 or value[1] != "-":
        raise ValueError(f"not a sequential id: {value!r}")
    return int(value[2:])


def highest_existing(db: Session, prefix: str) -> int:
    """Largest number already used in the entity table (0 when empty)."""
    column = _ID_COLUMNS[prefix]
    # longer string first so U-100000 sorts above U-99999
    stmt = (
        select(column)
        .where(column.like(f"{prefix}-%"))
        .order_by(func.length(column).desc(), column.desc())
        .limit(1)
    )
    last = db.execute(stmt).scalar_one_or_none()
    if not last:
        return 0
    try:
        return parse_id(last)
    except ValueError:
        return 0


def next_number(db: Session, prefix: str) -> int:
    """Atomically reserve the next number for ``prefix``.

    Runs inside the caller's transaction; nothing is committed here.
    """
    bumped = db.execute(
        update(models.IdSequence)
        .where(models.IdSequence.prefix == prefix)
        .values(last_value=models.IdSequence.last_value + 1)
    )
    if bumped.rowcount == 0:
        # First id for this prefix: continue after whatever the table already holds
        seq = models.IdSequence(prefix=prefix, last_value=highest_existing(db, prefix) + 1)
        db.add(seq)
        db.flush()
        return seq.last_value
    return db.execute(
        select(models.IdSequence.last_value).where(models.IdSequence.prefix == prefix)
    ).scalar_one()


def next_id(db: Session, entity: str) -> str:
    try:
        prefix = PREFIXES[entity]
    except KeyError:
        raise ValueError(f"unknown entity type: {entity!r}") from None
    return format_id(prefix, next_number(db, prefix))
