"""Optional converter chains for types outside the standard built-ins."""
