"""Campus reservations backend (cafeteria meals, sports facilities)."""
