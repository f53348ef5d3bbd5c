"""Test environment: set before tvtracker is imported so module-level settings pick it up."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "dev"
os.environ["DB_CREATE_ALL"] = "false"
os.environ["JWT_SECRET"] = "test-secret-do-not-use"
os.environ["JWT_ALGORITHM"] = "HS256"
# Lowest cost bcrypt allows; keeps the suite fast.
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
