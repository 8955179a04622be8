"""
Tests for the NamespaceRouter class.
"""

import pytest

from apifs.collection import CollectionDirectory
from apifs.config import ApiFSConfig
from apifs.errors import ParseError
from apifs.router import Directory, NamespaceRouter, split_path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/", ("", "")),
        ("", ("", "")),
        ("/customers", ("customers", "")),
        ("/customers/", ("customers", "")),
        ("/customers/CU001", ("customers", "/CU001")),
        ("//customers//CU001/", ("customers", "/CU001")),
        ("/customers/CU001/nested", ("customers", "/CU001/nested")),
    ],
)
def test_split_path(path, expected):
    """Test splitting paths into first segment and remainder."""
    assert split_path(path) == expected


def test_root(router):
    """Test the answers for the root itself."""
    assert router.entries("/") == ["customers", "payments"]
    assert router.is_directory("/")
    assert not router.is_file("/")
    assert not router.can_write("/")


def test_collection_directories(router):
    """Test the answers for a collection directory."""
    assert router.is_directory("/customers")
    assert router.is_directory("/customers/")
    assert not router.is_file("/customers")
    assert not router.can_write("/customers")


def test_unknown_collection(router, customers, payments):
    """Test that unknown collections are reported missing without remote calls."""
    assert not router.is_directory("/unknown")
    assert not router.is_file("/unknown")
    assert not router.is_file("/unknown/CU001")
    assert not router.can_write("/unknown/_create")
    assert router.entries("/unknown") == []

    assert customers.calls == []
    assert payments.calls == []


def test_delegates_to_collection(router):
    """Test that deeper paths are answered by the collection."""
    assert router.entries("/customers") == ["CU001", "CU002", "_create"]
    assert router.entries("/payments") == ["PM001", "_create"]
    assert router.is_file("/customers/CU001")
    assert not router.is_file("/customers/PM001")
    assert router.is_file("/payments/_create")
    assert not router.is_directory("/customers/CU001")
    assert router.can_write("/customers/_create")
    assert not router.can_write("/customers/CU001")


def test_no_nesting_below_objects(router):
    """Test that paths below an object never resolve."""
    assert not router.is_file("/customers/CU001/email")
    assert not router.is_directory("/customers/CU001/email")


def test_read(router):
    """Test reading through the router."""
    assert router.read("/customers/_create") == b""
    assert b'"PM001"' in router.read("/payments/PM001")


def test_read_missing(router):
    """Test reading paths that are not files."""
    with pytest.raises(FileNotFoundError):
        router.read("/unknown/CU001")
    with pytest.raises(IsADirectoryError):
        router.read("/customers")
    with pytest.raises(IsADirectoryError):
        router.read("/")


def test_write_creates(router, customers, payments):
    """Test that creation is sent to the matching collection only."""
    router.write("/customers/_create", b'{"email":"a@example.com"}')

    assert customers.count("create") == 1
    assert payments.calls == []


def test_write_then_list(router, customers):
    """Test that a listing after a create is fetched fresh."""
    router.entries("/customers")
    router.write("/customers/_create", b'{"email":"a@example.com"}')

    assert "CU003" in router.entries("/customers")
    assert customers.count("list") == 2


def test_write_malformed(router, customers):
    """Test that malformed payloads fail through the router."""
    with pytest.raises(ParseError):
        router.write("/customers/_create", b"not-json")
    assert customers.calls == []


def test_write_missing(router):
    """Test writing where there is no collection."""
    with pytest.raises(FileNotFoundError):
        router.write("/unknown/_create", b"{}")
    with pytest.raises(IsADirectoryError):
        router.write("/customers", b"{}")


def test_from_config(customers, payments):
    """Test building a router from configuration."""
    config = ApiFSConfig(collections={"payments": payments, "customers": customers}, ttl=5)
    router = NamespaceRouter.from_config(config)

    assert router.names == ["payments", "customers"]
    assert router.entries("/") == ["payments", "customers"]
    assert router.entries("/customers") == ["CU001", "CU002", "_create"]


def test_directory_is_abstract():
    """Test that the Directory interface cannot be used directly."""
    with pytest.raises(TypeError):
        Directory()


def test_router_accepts_any_directory(customers, clock):
    """Test nesting a router of routers."""
    inner = NamespaceRouter({"customers": CollectionDirectory(customers, timer=clock)})
    outer = NamespaceRouter({"sandbox": inner})

    # Only the first segment is routed; the inner router sees the remainder
    assert outer.is_directory("/sandbox")
    assert outer.entries("/sandbox") == ["customers"]
