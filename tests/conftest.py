import asyncio

import pytest

import callshape


@pytest.fixture
def loop():
    # pylint: disable=W0621, redefined-outer-name
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


@pytest.fixture
def reset_config():
    """
    Helper fixture that resets the configuration to its values before the
    test was run.
    """
    # pylint: disable=W0212, protected-access
    max_parameters = callshape._config._max_parameters
    warn_threshold = callshape._config._warn_threshold
    yield
    callshape._config._max_parameters = max_parameters
    callshape._config._warn_threshold = warn_threshold
