"""Output formatting: rich for humans, JSON for machines."""
