"""Test basic package functionality."""

import digitalocean_client


def test_version():
    """Test that package version is defined."""
    assert hasattr(digitalocean_client, "__version__")
    assert digitalocean_client.__version__ == "0.1.0"


def test_user_agent_carries_version():
    """Test that the default User-Agent names the package version."""
    from digitalocean_client.config import DEFAULT_USER_AGENT

    assert DEFAULT_USER_AGENT.endswith(f"/{digitalocean_client.__version__}")
