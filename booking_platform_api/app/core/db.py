"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager (``get_cursor``) and the
migration runner applied on application start (``init_db``).  Each
resource is stored in its own table; list references (a service's
facility types, a restaurant's cuisines, ...) live in link tables and
picture lists are stored as JSON text.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for the lifetime of the
    connection; SQLite leaves it off by default.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_code TEXT NOT NULL UNIQUE,
            full_name TEXT NOT NULL,
            phone_number TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            user_name TEXT NOT NULL UNIQUE,
            birth_date TEXT NOT NULL,
            password TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'Customer',
            active INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS providers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            provider_code TEXT NOT NULL UNIQUE,
            user_id INTEGER NOT NULL UNIQUE,
            provider_name TEXT NOT NULL,
            address TEXT NOT NULL,
            service_description TEXT,
            active INTEGER NOT NULL DEFAULT 1,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS admins (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            admin_code TEXT NOT NULL UNIQUE,
            user_id INTEGER NOT NULL,
            access_level TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS customers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_code TEXT NOT NULL UNIQUE,
            user_id INTEGER NOT NULL,
            loyalty_points INTEGER NOT NULL DEFAULT 0,
            active INTEGER NOT NULL DEFAULT 1,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS locations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            location_code TEXT NOT NULL UNIQUE,
            location_name TEXT NOT NULL,
            description TEXT NOT NULL,
            latitude REAL NOT NULL,
            longitude REAL NOT NULL
        );

        CREATE TABLE IF NOT EXISTS facility_types (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            facility_type_code TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            service_type TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS facilities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            facility_code TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            service_type TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS price_categories (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            price_category_code TEXT NOT NULL UNIQUE,
            cheap REAL NOT NULL,
            mid_range REAL NOT NULL,
            luxury REAL NOT NULL
        );

        CREATE TABLE IF NOT EXISTS suitabilities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            suitability_code TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS cuisine_types (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            type TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS dish_types (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS hotel_types (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            type TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS restaurant_types (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            type TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS coffee_types (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            description TEXT
        );

        CREATE TABLE IF NOT EXISTS services (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            service_code TEXT NOT NULL UNIQUE,
            provider_id INTEGER NOT NULL,
            location_id INTEGER,
            service_name TEXT NOT NULL,
            price REAL NOT NULL,
            discount_price REAL,
            description TEXT,
            status TEXT NOT NULL,
            images TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(provider_id) REFERENCES providers(id) ON DELETE CASCADE,
            FOREIGN KEY(location_id) REFERENCES locations(id) ON DELETE SET NULL
        );

        CREATE TABLE IF NOT EXISTS service_facility_types (
            service_id INTEGER NOT NULL,
            facility_type_id INTEGER NOT NULL,
            PRIMARY KEY(service_id, facility_type_id),
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE CASCADE,
            FOREIGN KEY(facility_type_id) REFERENCES facility_types(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS service_price_categories (
            service_id INTEGER NOT NULL,
            price_category_id INTEGER NOT NULL,
            PRIMARY KEY(service_id, price_category_id),
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE CASCADE,
            FOREIGN KEY(price_category_id) REFERENCES price_categories(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS service_suitabilities (
            service_id INTEGER NOT NULL,
            suitability_id INTEGER NOT NULL,
            PRIMARY KEY(service_id, suitability_id),
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE CASCADE,
            FOREIGN KEY(suitability_id) REFERENCES suitabilities(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS hotels (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            hotel_code TEXT NOT NULL UNIQUE,
            service_id INTEGER NOT NULL,
            hotel_type_id INTEGER,
            star_rating REAL NOT NULL,
            room_capacity INTEGER,
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE CASCADE,
            FOREIGN KEY(hotel_type_id) REFERENCES hotel_types(id) ON DELETE SET NULL
        );

        CREATE TABLE IF NOT EXISTS rooms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            room_code TEXT NOT NULL UNIQUE,
            hotel_id INTEGER NOT NULL,
            room_type TEXT NOT NULL,
            available_rooms INTEGER NOT NULL,
            available_date TEXT NOT NULL,
            price REAL NOT NULL,
            discount_price REAL,
            pictures TEXT,
            active INTEGER NOT NULL DEFAULT 1,
            adults INTEGER NOT NULL,
            children INTEGER NOT NULL,
            FOREIGN KEY(hotel_id) REFERENCES hotels(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS room_facilities (
            room_id INTEGER NOT NULL,
            facility_id INTEGER NOT NULL,
            PRIMARY KEY(room_id, facility_id),
            FOREIGN KEY(room_id) REFERENCES rooms(id) ON DELETE CASCADE,
            FOREIGN KEY(facility_id) REFERENCES facilities(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS restaurants (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            restaurant_code TEXT NOT NULL UNIQUE,
            service_id INTEGER NOT NULL,
            seating_capacity INTEGER NOT NULL,
            restaurant_type_id INTEGER,
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE CASCADE,
            FOREIGN KEY(restaurant_type_id) REFERENCES restaurant_types(id) ON DELETE SET NULL
        );

        CREATE TABLE IF NOT EXISTS restaurant_cuisine_types (
            restaurant_id INTEGER NOT NULL,
            cuisine_type_id INTEGER NOT NULL,
            PRIMARY KEY(restaurant_id, cuisine_type_id),
            FOREIGN KEY(restaurant_id) REFERENCES restaurants(id) ON DELETE CASCADE,
            FOREIGN KEY(cuisine_type_id) REFERENCES cuisine_types(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS restaurant_dish_types (
            restaurant_id INTEGER NOT NULL,
            dish_type_id INTEGER NOT NULL,
            PRIMARY KEY(restaurant_id, dish_type_id),
            FOREIGN KEY(restaurant_id) REFERENCES restaurants(id) ON DELETE CASCADE,
            FOREIGN KEY(dish_type_id) REFERENCES dish_types(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS dining_tables (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            table_code TEXT NOT NULL UNIQUE,
            restaurant_id INTEGER NOT NULL,
            table_type TEXT NOT NULL,
            available_date TEXT NOT NULL,
            picture TEXT,
            active INTEGER NOT NULL DEFAULT 1,
            price REAL NOT NULL,
            discount_price REAL,
            FOREIGN KEY(restaurant_id) REFERENCES restaurants(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS coffees (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            coffee_code TEXT NOT NULL UNIQUE,
            service_id INTEGER NOT NULL,
            coffee_type TEXT NOT NULL,
            average_price REAL NOT NULL,
            picture TEXT,
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS invoices (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            invoice_code TEXT NOT NULL UNIQUE,
            user_id INTEGER NOT NULL,
            service_id INTEGER,
            room_id INTEGER,
            quantity INTEGER NOT NULL,
            total_amount REAL NOT NULL,
            issue_date TEXT NOT NULL,
            payment_status TEXT NOT NULL DEFAULT 'unpaid',
            check_in_date TEXT NOT NULL,
            check_out_date TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending',
            pictures TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE SET NULL,
            FOREIGN KEY(room_id) REFERENCES rooms(id) ON DELETE SET NULL
        );

        -- target_id points at a room or a dining table depending on
        -- target_model, so it carries no foreign key.
        CREATE TABLE IF NOT EXISTS reviews (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            review_code TEXT NOT NULL UNIQUE,
            user_id INTEGER NOT NULL,
            positive_comment TEXT NOT NULL DEFAULT '',
            negative_comment TEXT NOT NULL DEFAULT '',
            stars INTEGER NOT NULL,
            date TEXT NOT NULL,
            target_id INTEGER NOT NULL,
            target_model TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS service_reviews (
            service_id INTEGER NOT NULL,
            review_id INTEGER NOT NULL,
            PRIMARY KEY(service_id, review_id),
            FOREIGN KEY(service_id) REFERENCES services(id) ON DELETE CASCADE,
            FOREIGN KEY(review_id) REFERENCES reviews(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS audit_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER,
            action TEXT NOT NULL,
            object_type TEXT,
            object_id INTEGER,
            timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            details TEXT
        );
        """,
    ),
    # Migration 2: indices on reference columns used by ownership walks
    # and the revenue report
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_services_provider_id ON services(provider_id);
        CREATE INDEX IF NOT EXISTS idx_hotels_service_id ON hotels(service_id);
        CREATE INDEX IF NOT EXISTS idx_rooms_hotel_id ON rooms(hotel_id);
        CREATE INDEX IF NOT EXISTS idx_restaurants_service_id ON restaurants(service_id);
        CREATE INDEX IF NOT EXISTS idx_dining_tables_restaurant_id ON dining_tables(restaurant_id);
        CREATE INDEX IF NOT EXISTS idx_coffees_service_id ON coffees(service_id);
        CREATE INDEX IF NOT EXISTS idx_invoices_user_id ON invoices(user_id);
        CREATE INDEX IF NOT EXISTS idx_invoices_room_id ON invoices(room_id);
        CREATE INDEX IF NOT EXISTS idx_reviews_target ON reviews(target_model, target_id);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
