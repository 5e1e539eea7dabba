"""Unit tests for storage configuration loading and validation"""

import pytest

from config import Settings
from infrastructure.storage.storage_config import (
    StorageConfig,
    load_storage_config_from_env,
    validate_storage_config,
)


def make_settings(**overrides) -> Settings:
    values = {
        "S3_ENDPOINT_URL": "http://localhost:9000",
        "S3_ACCESS_KEY_ID": "minioadmin",
        "S3_SECRET_ACCESS_KEY": "minioadmin",
        "S3_BUCKET_NAME": "autodoc-vehicle-documents",
    }
    values.update(overrides)
    return Settings(**values)


class TestLoadStorageConfig:
    """Building StorageConfig from settings"""

    def test_minio_config(self):
        config = load_storage_config_from_env(make_settings())

        assert config.endpoint_url == "http://localhost:9000"
        assert config.bucket_name == "autodoc-vehicle-documents"
        assert config.public_base_url is None
        assert config.url_expires_in_seconds == 7 * 24 * 3600

    def test_empty_endpoint_means_aws(self):
        config = load_storage_config_from_env(make_settings(S3_ENDPOINT_URL="", S3_REGION="sa-east-1"))

        assert config.endpoint_url is None
        assert config.region == "sa-east-1"

    def test_public_base_url(self):
        config = load_storage_config_from_env(make_settings(S3_PUBLIC_BASE_URL="https://cdn.autodoc.app"))

        assert config.public_base_url == "https://cdn.autodoc.app"

    def test_missing_bucket_rejected(self):
        with pytest.raises(ValueError, match="bucket_name"):
            load_storage_config_from_env(make_settings(S3_BUCKET_NAME=""))


class TestValidateStorageConfig:
    """Validation rules"""

    def base_config(self, **overrides) -> StorageConfig:
        values = {
            "endpoint_url": None,
            "access_key": "key",
            "secret_key": "secret",
            "bucket_name": "bucket",
        }
        values.update(overrides)
        return StorageConfig(**values)

    def test_valid_config(self):
        validate_storage_config(self.base_config())

    @pytest.mark.parametrize(
        "overrides,match",
        [
            ({"access_key": ""}, "access_key"),
            ({"secret_key": ""}, "secret_key"),
            ({"endpoint_url": "localhost:9000"}, "endpoint_url"),
            ({"public_base_url": "cdn.autodoc.app"}, "public_base_url"),
            ({"region": ""}, "region"),
            ({"url_expires_in_seconds": 0}, "url_expires_in_seconds"),
        ],
    )
    def test_invalid_config(self, overrides, match):
        with pytest.raises(ValueError, match=match):
            validate_storage_config(self.base_config(**overrides))
