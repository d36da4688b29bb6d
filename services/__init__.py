"""Service layer: identity, session and ledger-entry logic shared by the API blueprints."""
