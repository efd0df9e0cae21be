"""AI travel planner: plan generation, section parsing and grounded chat."""
