"""Seed an admin account and a few default categories.

Usage:
    SEED_ADMIN_EMAIL=admin@example.com SEED_ADMIN_PASSWORD='Admin@123' python add_user.py
"""
import os

from task_tracker.config import ADMIN_REGISTRATION_KEY
from task_tracker.database import create_tables, session_scope
from task_tracker.errors import ConflictError
from task_tracker.models import Category, UserRole
from task_tracker.services import auth as auth_service

DEFAULT_CATEGORIES = ["Work", "Personal", "Shopping"]

# Create tables if not exist
create_tables()

email = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
password = os.getenv("SEED_ADMIN_PASSWORD", "Admin@123")

with session_scope() as db:
    try:
        auth_service.register(
            db,
            name="Administrator",
            email=email,
            password=password,
            role=UserRole.ADMIN,
            admin_key=ADMIN_REGISTRATION_KEY,
        )
        print(f"Admin user created: {email}")
    except ConflictError:
        print("Admin user already exists")

    existing = {name for (name,) in db.query(Category.name).all()}
    for name in DEFAULT_CATEGORIES:
        if name not in existing:
            db.add(Category(name=name))

print(f"Categories: {', '.join(DEFAULT_CATEGORIES)}")
