"""Operational scripts: database bootstrap, migrations, and presence sweeps."""
