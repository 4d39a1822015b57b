"""HTTP surface for the profile sync engine."""
