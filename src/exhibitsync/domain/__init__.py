"""Domain layer: exhibition model, venue resolution, and reconciliation."""
