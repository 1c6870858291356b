from pathlib import Path

from kitchen.db import init_db, SessionLocal
from kitchen.seed import import_seed, load_seed


def main():
    init_db()
    p = Path(__file__).resolve().parents[1] / 'data' / 'seed.json'
    if not p.exists():
        print('data/seed.json not found')
        return
    data = load_seed(p)
    db = SessionLocal()
    try:
        added = import_seed(db, data)
    finally:
        db.close()
    print(
        f"Imported {added['users']} users, {added['recipes']} recipes, "
        f"{added['inventory']} inventory items"
    )


if __name__ == '__main__':
    main()
