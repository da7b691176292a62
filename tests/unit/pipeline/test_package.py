"""Tests for package writers, loaders and readers."""
import io
import zipfile

import pytest

from compack.core.exceptions import DescriptorError, PackageIOError, ResourceLoadError
from compack.pipeline.package import (
    DirectoryPackageWriter,
    DirectoryResourceLoader,
    ExportSession,
    MapResourceLoader,
    ZipPackageWriter,
    as_loader,
    dump_document,
    load_document,
    read_directory_package,
    read_zip_package,
)


class TestDocuments:
    """Tests for YAML document helpers."""

    def test_dump_keeps_key_order(self):
        text = dump_document({"kind": "form", "name": "orders", "code": None})
        assert text.splitlines()[0] == "kind: form"
        assert load_document(text) == {"kind": "form", "name": "orders", "code": None}

    def test_dump_keeps_unicode(self):
        assert "Café" in dump_document({"label": "Café"})

    @pytest.mark.parametrize("text", ["- a\n- b\n", "kind: [unclosed\n", ""])
    def test_load_rejects_non_mapping(self, text):
        with pytest.raises(DescriptorError):
            load_document(text, "config/form/a.yaml")


class TestExportSession:
    """Tests for the per-export dedup set."""

    def test_write_once(self, tmp_dir):
        session = ExportSession(DirectoryPackageWriter(tmp_dir))

        assert session.write_once("code/form/a.js", "one") is True
        assert session.write_once("code/form/a.js", "two") is False

        assert (tmp_dir / "code/form/a.js").read_text() == "one"
        assert session.written == {"code/form/a.js"}
        assert session.deduplicated == 1

    def test_upgrade_statements_deduplicated(self, tmp_dir):
        session = ExportSession(DirectoryPackageWriter(tmp_dir))
        session.add_upgrade_statement("INSERT 1;")
        session.add_upgrade_statement("INSERT 2;")
        session.add_upgrade_statement("INSERT 1;")
        assert session.upgrade_statements == ["INSERT 1;", "INSERT 2;"]

    def test_directory_write_failure_wrapped(self, tmp_dir):
        """An OSError while writing should become PackageIOError."""
        (tmp_dir / "code").write_text("a file, not a directory")
        writer = DirectoryPackageWriter(tmp_dir)
        with pytest.raises(PackageIOError):
            writer.write("code/form/a.js", b"x")

    def test_zip_writer(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            session = ExportSession(ZipPackageWriter(archive))
            session.write_once("code/form/a.js", "body")
            session.write_once("code/form/a.js", "body")

        with zipfile.ZipFile(io.BytesIO(buffer.getvalue())) as archive:
            assert archive.namelist() == ["code/form/a.js"]


class TestLoaders:
    """Tests for resource loaders."""

    def test_directory_loader(self, tmp_dir):
        (tmp_dir / "code/form").mkdir(parents=True)
        (tmp_dir / "code/form/a.js").write_text("body", encoding="utf-8")
        loader = DirectoryResourceLoader(tmp_dir)

        assert loader.load("code/form/a.js") == "body"
        assert loader.load("pkg/code/form/a.js") == "body"
        assert loader.load(str(tmp_dir / "code/form/a.js")) == "body"
        with pytest.raises(ResourceLoadError, match="b.js"):
            loader.load("code/form/b.js")

    def test_map_loader(self):
        loader = MapResourceLoader({"code/form/a.js": "body"})
        assert loader.load("code/form/a.js") == "body"
        with pytest.raises(ResourceLoadError):
            loader.load("code/form/b.js")

    def test_directory_loader_bad_encoding(self, tmp_dir):
        (tmp_dir / "resources/resource/public").mkdir(parents=True)
        (tmp_dir / "resources/resource/public/a.html").write_bytes(b"<p>caf\xe9</p>")

        with pytest.raises(ResourceLoadError, match="not valid utf-8"):
            DirectoryResourceLoader(tmp_dir).load("resources/resource/public/a.html")

    def test_map_loader_decodes_bytes(self):
        loader = MapResourceLoader({"code/form/a.js": b"body", "code/form/b.js": b"\xff"})
        assert loader.load("code/form/a.js") == "body"
        with pytest.raises(ResourceLoadError, match="b.js"):
            loader.load("code/form/b.js")

    def test_as_loader(self, tmp_dir):
        assert isinstance(as_loader({"a": "b"}), MapResourceLoader)
        assert isinstance(as_loader(tmp_dir), DirectoryResourceLoader)
        assert isinstance(as_loader(None, default_root=tmp_dir), DirectoryResourceLoader)
        loader = MapResourceLoader({})
        assert as_loader(loader) is loader


class TestReaders:
    """Tests for reading packages back."""

    def test_read_directory_package(self, tmp_dir):
        (tmp_dir / "config/form").mkdir(parents=True)
        (tmp_dir / "config/form/orders.yaml").write_text("kind: form\nname: orders\n")
        (tmp_dir / "code/form").mkdir(parents=True)
        (tmp_dir / "code/form/orders.js").write_text("body")

        contents = read_directory_package(tmp_dir)

        assert contents.documents == {
            "config/form/orders.yaml": {"kind": "form", "name": "orders"}
        }
        assert contents.loader.load("code/form/orders.js") == "body"

    def test_read_missing_directory(self, tmp_dir):
        with pytest.raises(PackageIOError):
            read_directory_package(tmp_dir / "missing")

    def test_read_zip_package(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("crm/config/form/orders.yaml", "kind: form\nname: orders\n")
            archive.writestr("crm/code/form/orders.js", "body")
            archive.writestr("crm/migration/upgrade.sql", "INSERT 1;")
            archive.writestr("README.txt", "ignored")

        contents = read_zip_package(buffer.getvalue())

        assert list(contents.documents) == ["config/form/orders.yaml"]
        assert contents.loader.load("code/form/orders.js") == "body"

    def test_read_invalid_zip(self):
        with pytest.raises(PackageIOError):
            read_zip_package(b"not an archive")

    def test_zip_bad_body_fails_on_load(self):
        """A body that does not decode fails only when it is loaded."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("config/form/orders.yaml", "kind: form\nname: orders\n")
            archive.writestr("resources/resource/public/a.html", b"<p>caf\xe9</p>")

        contents = read_zip_package(buffer.getvalue())

        assert list(contents.documents) == ["config/form/orders.yaml"]
        with pytest.raises(ResourceLoadError, match="a.html"):
            contents.loader.load("resources/resource/public/a.html")

    def test_zip_bad_document(self):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("config/form/orders.yaml", b"name: caf\xe9\n")

        with pytest.raises(DescriptorError, match="not valid utf-8"):
            read_zip_package(buffer.getvalue())
