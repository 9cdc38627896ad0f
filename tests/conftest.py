import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    # fsviz.cli.main() configures structlog globally with the stream of the
    # running test; do not let that leak into the next one.
    yield
    structlog.reset_defaults()
