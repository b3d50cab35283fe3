"""
Root conftest - prepares the environment before the app reads its settings.
"""
import os

os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_DB", "test_users")
os.environ.setdefault("DATABASE_URL", "sqlite://")
# cheapest bcrypt cost so the suite stays fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")
