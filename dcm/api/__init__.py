"""HTTP surface for the payout engine."""
