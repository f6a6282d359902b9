"""
Seed the catalog database with the deterministic sample benefits.
Drops and recreates the benefits table.
Run (after `pip install -e .`): python backend/scripts/seed_sqlite.py [count]
"""

import sys

from catalog.db.database import engine, session_scope
from catalog.db.fixtures import build_sample_benefits
from catalog.db.models import Base
from catalog.db.repositories import BenefitRepository
from catalog.services.query_engine import list_categories


def main():
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 140

    print(f"Database: {engine.url}")

    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    print("Tables created")

    try:
        with session_scope() as session:
            repo = BenefitRepository(session)
            inserted = repo.add_benefits(build_sample_benefits(count))
            categories = list_categories(repo.list_benefits())
            print(f"\nDone! Inserted {inserted} benefits")
            print(f"Verified: {repo.count_benefits()} rows in benefits")
            print(f"Categories ({len(categories)}): {', '.join(categories)}")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
