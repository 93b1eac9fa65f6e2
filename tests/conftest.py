import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="run tests marked as slow",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: exhaustive sweeps, opt in with --slow")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return

    for item in items:
        if "slow" in item.keywords:
            item.add_marker(
                pytest.mark.skip(
                    reason="need --slow option to run exhaustive sweeps"
                )
            )
