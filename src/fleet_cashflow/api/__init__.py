"""HTTP API for the fleet cash-flow planner."""
