"""Integrations with SQL libraries. Importing a module requires its library."""
