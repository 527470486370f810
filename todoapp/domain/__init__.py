"""Domain values and validation rules."""
