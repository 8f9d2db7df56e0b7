"""
Test configuration management
"""
import pytest
import tempfile
import os
from pydantic import ValidationError
from zos_search.core.config import Config, ZosmfConfig, SearchConfig


class TestConfig:
    """Test configuration management"""

    def test_zosmf_config_creation(self):
        """Test creating a z/OSMF connection configuration"""
        config = ZosmfConfig(
            host="mainframe.example.com",
            port=10443,
            user="ibmuser",
            password="secret"
        )

        assert config.host == "mainframe.example.com"
        assert config.port == 10443
        assert config.protocol == "https"
        assert config.reject_unauthorized is True
        assert config.base_url == "https://mainframe.example.com:10443"

    def test_base_url_with_base_path(self):
        """Test that a base path is appended without a trailing slash"""
        config = ZosmfConfig(host="apiml", port=7554, base_path="/ibmzosmf/api/v1/")

        assert config.base_url == "https://apiml:7554/ibmzosmf/api/v1"

    def test_invalid_port_rejected(self):
        """Test port range validation"""
        with pytest.raises(ValidationError):
            ZosmfConfig(port=0)

    def test_invalid_protocol_rejected(self):
        """Test protocol validation"""
        with pytest.raises(ValidationError):
            ZosmfConfig(protocol="ftp")

    def test_search_config_defaults(self):
        """Test search defaults"""
        config = SearchConfig()

        assert config.max_concurrent_requests == 1
        assert config.timeout is None
        assert config.case_sensitive is False
        assert config.mainframe_search is False

    def test_from_env(self, monkeypatch):
        """Test reading connection settings from the environment"""
        monkeypatch.setenv("ZOSMF_HOST", "lpar1")
        monkeypatch.setenv("ZOSMF_PORT", "1443")
        monkeypatch.setenv("ZOSMF_USER", "ibmuser")
        monkeypatch.setenv("ZOSMF_REJECT_UNAUTHORIZED", "false")

        config = Config.from_env()

        assert config.zosmf.host == "lpar1"
        assert config.zosmf.port == 1443
        assert config.zosmf.user == "ibmuser"
        assert config.zosmf.reject_unauthorized is False

    def test_config_serialization(self):
        """Test configuration serialization to/from file"""
        config = Config(
            zosmf=ZosmfConfig(
                host="lpar1",
                port=443
            ),
            search=SearchConfig(
                max_concurrent_requests=8,
                timeout=30
            )
        )

        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            path = f.name

        try:
            config.save_to_file(path)

            # Load config back
            loaded_config = Config.load_from_file(path)

            assert loaded_config.zosmf.host == "lpar1"
            assert loaded_config.search.max_concurrent_requests == 8
            assert loaded_config.search.timeout == 30
        finally:
            os.unlink(path)


if __name__ == '__main__':
    pytest.main([__file__])
