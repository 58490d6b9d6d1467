#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample publishers, users and books for
development.

USAGE:
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing data (optional)
3. Creates publishers and users, then books that reference them
4. Soft-deletes one publisher so the null-publisher view can be tried out
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.database import SessionLocal, create_tables
from app.models import Book, Publisher, User


def clear_data(db: Session) -> None:
    """Remove all rows (books first, they reference the others)."""
    print("Clearing existing data...")
    db.execute(delete(Book))
    db.execute(delete(Publisher))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_publishers(db: Session) -> dict[str, Publisher]:
    print("Creating publishers...")
    publishers = {
        name: Publisher(name=name)
        for name in ("Tech Press", "Ocean Books", "Northwind Publishing")
    }
    db.add_all(publishers.values())
    db.commit()
    print(f"Created {len(publishers)} publishers.")
    return publishers


def create_users(db: Session) -> dict[str, User]:
    print("Creating users...")
    users = {name: User(name=name) for name in ("alice", "bob")}
    db.add_all(users.values())
    db.commit()
    print(f"Created {len(users)} users.")
    return users


def create_books(
    db: Session,
    publishers: dict[str, Publisher],
    users: dict[str, User],
) -> list[Book]:
    print("Creating books...")
    books_data = [
        ("Kotlin in Action", "コトリン イン アクション", "Dmitry Jemerov", "Tech Press", "alice", 4200),
        ("Effective Java", "エフェクティブ ジャバ", "Joshua Bloch", "Tech Press", "alice", 4800),
        ("Fluent Python", "フルエント パイソン", "Luciano Ramalho", "Ocean Books", "bob", 5200),
        ("Python Cookbook", "パイソン クックブック", "David Beazley", "Ocean Books", "bob", 3900),
        ("Designing Data-Intensive Applications", "デザイニング データ インテンシブ アプリケーションズ",
         "Martin Kleppmann", "Northwind Publishing", "alice", 5600),
        ("Free Software, Free Society", "フリー ソフトウェア フリー ソサエティ",
         "Richard Stallman", "Northwind Publishing", "bob", 0),
    ]

    books = [
        Book(
            title=title,
            title_kana=title_kana,
            author=author,
            publisher_id=publishers[publisher].id,
            user_id=users[user].id,
            price=price,
        )
        for title, title_kana, author, publisher, user, price in books_data
    ]
    db.add_all(books)
    db.commit()

    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        publishers = create_publishers(db)
        users = create_users(db)
        books = create_books(db, publishers, users)

        # Books of a soft-deleted publisher stay visible with null publisher fields
        publishers["Northwind Publishing"].is_deleted = True
        db.commit()

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Publishers: {len(publishers)} (1 soft-deleted)")
        print(f"  - Users: {len(users)}")
        print(f"  - Books: {len(books)}")
        print("\nAPI documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
