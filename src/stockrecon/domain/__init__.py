"""Domain layer: model, reconciliation engine and ports."""
