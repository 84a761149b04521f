"""Unit test fixtures (mocks and stubs).

Provides mock host objects for testing without a real agent runtime.
"""

from unittest.mock import MagicMock, Mock

import pytest

from turn_retry.config import Settings
from turn_retry.models.messages import ModelInfo
from turn_retry.persistence.audit_log import RetryAuditLog
from turn_retry.retry.coordinator import RetryCoordinator


@pytest.fixture
def mock_host():
    """Mock HostAPI: records subscriptions, commands and sent messages."""
    mock = MagicMock()
    mock.on = Mock(return_value=None)
    mock.register_command = Mock(return_value=None)
    mock.send_message = Mock(return_value=None)
    mock.get_thinking_level = Mock(return_value="medium")
    return mock


@pytest.fixture
def mock_ui():
    """Mock HostUI with an empty editor."""
    mock = MagicMock()
    mock.notify = Mock(return_value=None)
    mock.set_status = Mock(return_value=None)
    mock.get_editor_text = Mock(return_value="")
    mock.on_terminal_input = Mock(return_value=None)
    return mock


@pytest.fixture
def mock_ctx(mock_ui, model_info: ModelInfo):
    """Mock ExtensionContext for an idle agent."""
    mock = MagicMock()
    mock.ui = mock_ui
    mock.cwd = "/work/project"
    mock.model = model_info
    mock.session_id = "session-123"
    mock.is_idle = Mock(return_value=True)
    return mock


@pytest.fixture
def coordinator(mock_host, test_settings: Settings, audit_log: RetryAuditLog) -> RetryCoordinator:
    """Installed RetryCoordinator wired to the mock host."""
    return RetryCoordinator(mock_host, test_settings, audit_log=audit_log).install()
