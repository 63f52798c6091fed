"""HTTP surface for hosting games in a single process."""
