"""Flask blueprints for the members site."""
