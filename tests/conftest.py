"""Root pytest configuration and shared fixtures.

Test Structure:
    tests/
    ├── unit/
    │   ├── application/     # Cache, queries, pagination, mutations
    │   ├── config/          # Settings loading
    │   ├── contracts/       # Wire models
    │   ├── domain/          # Error values
    │   ├── infrastructure/  # HTTP client, API adapter, wiring
    │   └── presentation/    # CLI
    └── shared/              # Factories for contract models
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from mockbank_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load .env.dev for tests (same as local development)
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.dev").exists():
    load_dotenv(CONFIG_DIR / ".env.dev")
elif (CONFIG_DIR / ".env").exists():
    load_dotenv(CONFIG_DIR / ".env")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Every test sees settings built from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()
