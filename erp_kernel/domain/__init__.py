"""Pure domain primitives: clock, dates, numeric values, validation results."""
