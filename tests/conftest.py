import shutil

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--no-external",
        action="store_true",
        default=False,
        help="Skip interop tests that shell out to a system gzip binary.",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "external: mark test as requiring a gzip binary (use --no-external to skip)")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--no-external"):
        reason = "--no-external option used"
    elif shutil.which("gzip") is None:
        reason = "gzip binary not found"
    else:
        return
    skip_external = pytest.mark.skip(reason=reason)
    for item in items:
        if "external" in item.keywords:
            item.add_marker(skip_external)
