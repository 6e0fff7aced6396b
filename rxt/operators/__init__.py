"""Built-in RXT operators."""
