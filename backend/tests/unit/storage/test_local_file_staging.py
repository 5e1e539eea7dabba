"""Unit tests for LocalFileStaging"""

import base64
import io

import pytest

from domain.documents.ports.file_staging_port import StagingError
from infrastructure.staging.local_file_staging import LocalFileStaging

PDF_BYTES = b"%PDF-1.4 staged"


@pytest.fixture
def picked_file(tmp_path):
    path = tmp_path / "picked" / "soap.pdf"
    path.parent.mkdir()
    path.write_bytes(PDF_BYTES)
    return path


class TestStage:
    """Resolving picked locations"""

    def test_file_uri_read_in_place(self, tmp_path, picked_file):
        staging = LocalFileStaging(tmp_path / "cache")

        path = staging.stage(picked_file.as_uri(), "soap.pdf")

        assert path == picked_file
        assert not (tmp_path / "cache").exists()

    def test_bare_path_read_in_place(self, tmp_path, picked_file):
        staging = LocalFileStaging(tmp_path / "cache")

        assert staging.stage(str(picked_file), "soap.pdf") == picked_file

    def test_file_uri_with_spaces(self, tmp_path):
        path = tmp_path / "revisión técnica.pdf"
        path.write_bytes(PDF_BYTES)
        staging = LocalFileStaging(tmp_path / "cache")

        assert staging.stage(path.as_uri(), path.name) == path

    def test_missing_file_raises(self, tmp_path):
        staging = LocalFileStaging(tmp_path / "cache")

        with pytest.raises(StagingError, match="File not found"):
            staging.stage((tmp_path / "gone.pdf").as_uri(), "gone.pdf")

    def test_provider_uri_copied_to_cache(self, tmp_path):
        opened = []

        def resolver(location):
            opened.append(location)
            return io.BytesIO(PDF_BYTES)

        staging = LocalFileStaging(tmp_path / "cache", content_resolver=resolver)

        path = staging.stage("content://com.android.providers/document/42", "permiso circulación.pdf")

        assert opened == ["content://com.android.providers/document/42"]
        assert path.parent == tmp_path / "cache"
        assert path.name.endswith("_permiso_circulación.pdf")
        assert path.read_bytes() == PDF_BYTES

    def test_provider_uri_without_resolver_raises(self, tmp_path):
        staging = LocalFileStaging(tmp_path / "cache")

        with pytest.raises(StagingError, match="no content resolver"):
            staging.stage("content://provider/document/1", "soap.pdf")

    def test_resolver_failure_raises(self, tmp_path):
        def resolver(location):
            raise OSError("provider gone")

        staging = LocalFileStaging(tmp_path / "cache", content_resolver=resolver)

        with pytest.raises(StagingError, match="provider gone"):
            staging.stage("content://provider/document/1", "soap.pdf")


class TestReadEncoded:
    """Base64 encoding of staged files"""

    def test_read_encoded(self, tmp_path, picked_file):
        staging = LocalFileStaging(tmp_path / "cache")

        encoded = staging.read_encoded(picked_file)

        assert base64.b64decode(encoded) == PDF_BYTES

    def test_unreadable_file_raises(self, tmp_path):
        staging = LocalFileStaging(tmp_path / "cache")

        with pytest.raises(StagingError):
            staging.read_encoded(tmp_path / "missing.pdf")


class TestCacheCopies:
    """Copies of provider documents in the staging cache"""

    @pytest.fixture
    def staging(self, tmp_path):
        return LocalFileStaging(tmp_path / "cache", content_resolver=lambda location: io.BytesIO(PDF_BYTES))

    def test_same_display_name_gets_distinct_copies(self, staging):
        first = staging.stage("content://provider/document/1", "soap.pdf")
        second = staging.stage("content://provider/document/2", "soap.pdf")

        assert first != second
        assert first.exists() and second.exists()

    def test_copy_removed_after_read(self, tmp_path, staging):
        path = staging.stage("content://provider/document/1", "soap.pdf")

        encoded = staging.read_encoded(path)

        assert base64.b64decode(encoded) == PDF_BYTES
        assert not path.exists()
        assert list((tmp_path / "cache").iterdir()) == []

    def test_file_read_in_place_is_kept(self, staging, picked_file):
        path = staging.stage(picked_file.as_uri(), "soap.pdf")

        staging.read_encoded(path)

        assert picked_file.exists()

    def test_failed_copy_leaves_nothing_behind(self, tmp_path):
        class BrokenStream(io.BytesIO):
            def read(self, *args):
                raise OSError("stream reset")

        staging = LocalFileStaging(tmp_path / "cache", content_resolver=lambda location: BrokenStream())

        with pytest.raises(StagingError, match="stream reset"):
            staging.stage("content://provider/document/1", "soap.pdf")

        assert list((tmp_path / "cache").iterdir()) == []
