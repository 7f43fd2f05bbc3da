"""Configuration for Mini-Atlas, read from the environment."""
