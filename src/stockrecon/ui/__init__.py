"""User interfaces for stockrecon."""
