"""Business logic for tasks and their catalogs."""
