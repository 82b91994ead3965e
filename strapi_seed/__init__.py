"""Seed a Strapi blog with example content"""

__version__ = "1.0.0"
