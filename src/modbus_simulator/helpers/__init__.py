"""Domain services coordinating the store and the register cache."""
