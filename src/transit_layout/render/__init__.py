"""Debug drawings of computed placements."""
