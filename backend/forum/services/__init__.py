"""Services around the content stores: user directory and seed data."""
