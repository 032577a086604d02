"""Document and dataset operations built on the store repositories."""
