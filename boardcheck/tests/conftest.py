"""Shared fixtures for boardcheck tests."""

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from boardcheck.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import boardcheck.services.http_client as http_mod

    http_mod._client = None

    # 3. Health check cache
    import boardcheck.main as main_mod

    main_mod._health_cache = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from boardcheck.config import Settings, get_settings

    test_settings = Settings(
        monday_api_token="test-token",
        monday_deals_board_id="1234567890",
        monday_api_url="https://monday.test/v2",
        monday_api_version="2024-10",
        current_stage_column_id="deal_stage",
        webhook_stage_column_id="color_mktrw6k3",
        sample_item_limit=3,
        expose_error_stack=True,
    )

    get_settings.cache_clear()
    monkeypatch.setattr("boardcheck.config.get_settings", lambda: test_settings)

    # Patch get_settings in every module that imports it directly
    # (from boardcheck.config import get_settings creates a local binding
    # that the boardcheck.config monkeypatch above does not affect)
    for mod_path in [
        "boardcheck.main",
        "boardcheck.routers.column_check",
        "boardcheck.services.column_check",
        "boardcheck.services.monday",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings
