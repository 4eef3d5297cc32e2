"""Declarative base for all share repair models."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
