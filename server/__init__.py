"""HTTP facade for the Briscola host."""
