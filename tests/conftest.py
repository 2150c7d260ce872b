"""Global test fixtures."""

import os

import logfire

# Keep tests away from the user's data directory and config file.
# This must happen at module load time, before any test module builds a Config.
os.environ.setdefault("OHMAGE_DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.pop("OHMAGE_CONFIG_FILE", None)

logfire.configure(send_to_logfire=False, console=False)
