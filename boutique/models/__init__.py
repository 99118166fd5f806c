"""
models/__init__.py
------------------
Re-export all models so create_tables.py (or an Alembic env.py) can import
Base and discover every table via a single import:

    from boutique.models import Base
"""

from boutique.db.base import Base
from boutique.models.societe import Societe
from boutique.models.role import Role
from boutique.models.user import User
from boutique.models.categorie import Categorie
from boutique.models.taille import Taille
from boutique.models.article import Article
from boutique.models.client import Client
from boutique.models.reservation import Reservation, StatutReservation
from boutique.models.paiement import Paiement
from boutique.models.configuration import Configuration

__all__ = [
    "Base",
    "Societe",
    "Role",
    "User",
    "Categorie",
    "Taille",
    "Article",
    "Client",
    "Reservation",
    "StatutReservation",
    "Paiement",
    "Configuration",
]
