"""microkit test suite."""
