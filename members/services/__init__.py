"""Integrations with the credential store, session store and hasher."""
