"""Business services built on the repositories."""
