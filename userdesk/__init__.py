"""Client de bureau pour l'inscription et la gestion des utilisateurs."""

__version__ = "0.1.0"
